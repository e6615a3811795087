from app.models.user import User, Base
from app.models.role import AppRole, RoleAssignment
from app.models.audit import AdminAction
from app.models.ad_view import AdView
from app.models.message import PrivateMessage
from app.models.department import DepartmentMember, DepartmentRole, DepartmentSpace
from app.models.leaderboard import LeaderboardEntry
from app.models.course import Course, DepartmentalCourse
from app.models.community import CommunityLike, CommunityPost

__all__ = [
    "User",
    "Base",
    "AppRole",
    "RoleAssignment",
    "AdminAction",
    "AdView",
    "PrivateMessage",
    "DepartmentMember",
    "DepartmentRole",
    "DepartmentSpace",
    "LeaderboardEntry",
    "Course",
    "DepartmentalCourse",
    "CommunityLike",
    "CommunityPost",
]
