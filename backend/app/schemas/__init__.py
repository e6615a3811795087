from app.schemas.user import (
    UserCreate,
    UserLogin,
    UserProfile,
    UserProfileUpdate,
    TokenResponse,
    ChangePassword,
)
from app.schemas.admin import (
    RoleOut,
    AddAdminIn,
    SendMessageIn,
    AdminActionOut,
    DirectoryUserOut,
)
from app.schemas.ad import AdStatusOut, AdStageStartOut, AdStageCompleteIn
from app.schemas.department import (
    DepartmentJoinIn,
    DepartmentJoinOut,
    MemberRoleUpdate,
    ClassRepPromotion,
)
from app.schemas.leaderboard import LeaderboardEntryOut, ScoreSubmit
from app.schemas.assistant import AssistantMessage, AssistantRequest, CourseContext
from app.schemas.course import (
    CourseIn,
    CourseOut,
    DepartmentalCourseIn,
    DepartmentalCourseOut,
    CommunityPostIn,
    CommunityLikeOut,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserProfile",
    "UserProfileUpdate",
    "TokenResponse",
    "ChangePassword",
    "RoleOut",
    "AddAdminIn",
    "SendMessageIn",
    "AdminActionOut",
    "DirectoryUserOut",
    "AdStatusOut",
    "AdStageStartOut",
    "AdStageCompleteIn",
    "DepartmentJoinIn",
    "DepartmentJoinOut",
    "MemberRoleUpdate",
    "ClassRepPromotion",
    "LeaderboardEntryOut",
    "ScoreSubmit",
    "AssistantMessage",
    "AssistantRequest",
    "CourseContext",
    "CourseIn",
    "CourseOut",
    "DepartmentalCourseIn",
    "DepartmentalCourseOut",
    "CommunityPostIn",
    "CommunityLikeOut",
]
