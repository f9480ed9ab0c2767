from pydantic import BaseModel


class StockCheckResult(BaseModel):
    success: bool
    message: str
    count: int
