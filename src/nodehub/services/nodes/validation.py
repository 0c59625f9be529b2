# src/nodehub/services/nodes/validation.py
from __future__ import annotations
import ipaddress
import re
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from nodehub.domain import NodeFields, ValidationError

# порядок важен: ошибка называет первое отсутствующее поле
REQUIRED_FIELDS = ("name", "tags", "ram", "disk", "processor", "address", "port", "apiKey")

# hostname или IPv4, без схемы, порта и пути
_ADDRESS_RE = r"^[A-Za-z0-9](?:[A-Za-z0-9\-.]*[A-Za-z0-9])?$"
_NUMERIC_RE = re.compile(r"^[0-9.]+$")


class NodeFieldsModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    tags: str
    ram: int = Field(gt=0)
    disk: int = Field(gt=0)
    processor: str = Field(min_length=1)
    address: str = Field(min_length=1, max_length=253, pattern=_ADDRESS_RE)
    port: int = Field(ge=1, le=65535)
    api_key: str = Field(min_length=1, validation_alias=AliasChoices("apiKey", "api_key"))

    @field_validator("address")
    @classmethod
    def address_numeric_is_ipv4(cls, v: str) -> str:
        # из одних цифр и точек httpx примет только корректный IPv4
        if _NUMERIC_RE.match(v):
            try:
                ipaddress.IPv4Address(v)
            except ValueError:
                raise ValueError("not a valid IPv4 address") from None
        return v


def _lookup(data: Mapping[str, Any], field: str) -> Any:
    if field == "apiKey":
        return data.get("apiKey", data.get("api_key"))
    return data.get(field)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(data: Mapping[str, Any]) -> NodeFields:
    """Проверка полей ноды для register/update. Бросает ValidationError с именем поля."""
    for field in REQUIRED_FIELDS:
        if _is_missing(_lookup(data, field)):
            raise ValidationError(field)
    try:
        model = NodeFieldsModel.model_validate(dict(data))
    except PydanticValidationError as e:
        err = e.errors()[0]
        loc = str(err["loc"][0]) if err.get("loc") else "input"
        raise ValidationError("apiKey" if loc == "api_key" else loc, message=err["msg"]) from None
    return NodeFields(**model.model_dump())
