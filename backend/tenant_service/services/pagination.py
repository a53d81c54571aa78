import math
from typing import Any, Callable

from sqlalchemy.orm import Query

from tenant_service.core.validation import validate_pagination


def paginate(query: Query, page: int, size: int, mapper: Callable[[Any], Any]) -> dict:
    validate_pagination(page, size)
    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    return {
        "content": [mapper(item) for item in items],
        "page": page,
        "size": size,
        "total_elements": total,
        "total_pages": math.ceil(total / size) if total else 0,
    }
