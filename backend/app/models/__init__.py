from app.models.user import User
from app.models.skill import Skill, UserSkill
from app.models.career_path import CareerPath, RoadmapStep
from app.models.user_goal import UserGoal
from app.models.user_progress import UserProgress
from app.models.resource import Resource
from app.models.task import Task, TaskPriority, TaskStatus

__all__ = [
    "User",
    "Skill",
    "UserSkill",
    "CareerPath",
    "RoadmapStep",
    "UserGoal",
    "UserProgress",
    "Resource",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
