from fastapi import APIRouter

from app.api.routes import draft, managers, players, trades

api_router = APIRouter()
api_router.include_router(draft.router)
api_router.include_router(trades.router)
api_router.include_router(managers.router)
api_router.include_router(players.router)
