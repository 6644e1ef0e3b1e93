"""관리용 CLI 스크립트"""
