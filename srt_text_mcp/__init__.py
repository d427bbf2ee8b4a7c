"""SRT・注釈テキスト変換MCPサーバー"""
