from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "StaffHub Backend",
        "status": "ok",
        "graphql": "/graphql",
        "health": "/health",
    }
