"""Eco Fridge - 가정용 식품 재고 관리 백엔드 및 오프라인 클라이언트"""

__version__ = "1.0.0"
