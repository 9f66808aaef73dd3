# state.py
from typing_extensions import List, Dict, Any, Optional, TypedDict, cast
from pydantic import BaseModel, Field
from pydantic.type_adapter import TypeAdapter

from models import CartItem


class SessionModel(BaseModel):
    session_id: str
    user_id: str
    cart: List[CartItem] = Field(default_factory=list)


class SessionTD(TypedDict, total=False):
    session_id: str
    user_id: str
    cart: List[Dict[str, Any]]


session_adapter = TypeAdapter(SessionModel)


def to_stored(model: SessionModel) -> SessionTD:
    return cast(SessionTD, model.model_dump())


def from_stored(raw: Optional[SessionTD]) -> Optional[SessionModel]:
    if not raw:
        return None
    return session_adapter.validate_python(raw)
