from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
def health():
    return {"message": "Todo API is running!"}
