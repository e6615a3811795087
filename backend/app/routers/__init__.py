from app.routers.auth import router as auth_router
from app.routers.roles import router as roles_router
from app.routers.admin import router as admin_router
from app.routers.messages import router as messages_router
from app.routers.ads import router as ads_router
from app.routers.presence import router as presence_router
from app.routers.departments import router as departments_router
from app.routers.leaderboard import router as leaderboard_router
from app.routers.assistant import router as assistant_router
from app.routers.courses import admin_router as course_admin_router
from app.routers.courses import router as courses_router

__all__ = [
    "auth_router",
    "roles_router",
    "admin_router",
    "messages_router",
    "ads_router",
    "presence_router",
    "departments_router",
    "leaderboard_router",
    "assistant_router",
    "courses_router",
    "course_admin_router",
]
