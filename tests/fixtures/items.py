"""아이템 요청 페이로드 (DB 행 아님)"""

MILK = {
    "name": "서울우유",
    "category": "유제품",
    "storage_method": "fridge",
    "expiry_date": "2024-01-08",
    "quantity": 2,
}

PORK = {
    "name": "삼겹살",
    "category": "육류",
    "storage_method": "fridge",
    "expiry_date": "2024-01-04",
}

RAMEN = {
    "name": "신라면",
    "category": "가공식품",
    "storage_method": "pantry",
    "expiry_date": "2024-06-01",
    "quantity": 5,
}

ITEM_PAYLOADS = [MILK, PORK, RAMEN]
