from pydantic import BaseModel


class UserCreate(BaseModel):
    email: str
    password: str

    class Config:
        extra = "allow"  # Extra fields pass validation, only mapped columns are stored


class UserResponse(BaseModel):
    id: int
    email: str

    class Config:
        from_attributes = True  # Pour compatibilité Pydantic v2
