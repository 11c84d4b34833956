"""汇总导入全部 ORM 模型，确保 Base.metadata 包含所有表"""

from devfolio.modules.message.models import Message
from devfolio.modules.portfolio.models import Portfolio
from devfolio.modules.project.models import Project
from devfolio.modules.user.models import SocialLink, User, UserSkill

__all__ = ["Message", "Portfolio", "Project", "SocialLink", "User", "UserSkill"]
