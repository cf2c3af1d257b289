from pydantic import BaseModel


class NotificationResponse(BaseModel):
    message: str
    kind: str
    created_at: str
