"""Pydantic models for request validation and responses."""
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .config import SUCCESS_STATUS, FAIL_STATUS, MAX_DB_INT, MAX_PASSWORD_BYTES


class ResponseModel(BaseModel):
    """Envelope wrapped around every API payload."""
    status: str
    message: str = ""
    data: Any = None

    @classmethod
    def success(cls, message: str = "", data: Any = None) -> "ResponseModel":
        return cls(status=SUCCESS_STATUS, message=message, data=data)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ResponseModel":
        return cls(status=FAIL_STATUS, message=message, data=data)


# === Accounts ===

class RoleModel(BaseModel):
    id: int
    name: str


class UserModel(BaseModel):
    id: int
    name: str
    role: RoleModel

    @classmethod
    def from_row(cls, row: dict) -> "UserModel":
        return cls(
            id=row["id"],
            name=row["name"],
            role=RoleModel(id=row["role_id"], name=row["role_name"])
        )


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=64)
    password: str = Field(..., min_length=4, max_length=128)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=64)

    @field_validator("name", mode="before")
    @classmethod
    def normalise_name(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class RoleAssignment(BaseModel):
    role_id: int = Field(..., ge=1, le=MAX_DB_INT)


# === Catalogue ===

class CategoryModel(BaseModel):
    id: int
    name: str


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class ProductModel(BaseModel):
    """Product as exposed by the API. The stored ``name`` is the ``title``."""
    id: int
    title: str
    description: str
    price: float
    quantity: int
    image: Optional[str] = None
    category: CategoryModel

    @classmethod
    def from_row(cls, row: dict) -> "ProductModel":
        return cls(
            id=row["id"],
            title=row["name"],
            description=row["description"],
            price=row["price"],
            quantity=row["quantity"],
            image=row["image"],
            category=CategoryModel(id=row["category_id"], name=row["category_name"])
        )


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: float = Field(..., gt=0, allow_inf_nan=False)
    quantity: int = Field(0, ge=0, le=MAX_DB_INT)
    image: Optional[str] = None
    category_id: int = Field(..., ge=1, le=MAX_DB_INT)


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    quantity: Optional[int] = Field(None, ge=0, le=MAX_DB_INT)
    image: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1, le=MAX_DB_INT)
