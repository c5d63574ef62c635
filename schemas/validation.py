from typing import Any, List, Sequence

from pydantic import BaseModel


class FieldError(BaseModel):
    """Ошибка валидации одного поля"""
    field: str
    message: str


def field_errors(errors: Sequence[Any]) -> List[FieldError]:
    """Преобразовать ошибки pydantic/FastAPI в список FieldError"""
    result = []
    for error in errors:
        # loc looks like ("body", "title") for request bodies, ("query", "status") for params
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        result.append(FieldError(field=".".join(loc) or "body", message=message))
    return result
