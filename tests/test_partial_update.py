from uuid_utils.compat import uuid7

from devfolio.core.partial_update import build_partial_update, changed_fields
from devfolio.modules.project.models import Project
from devfolio.modules.project.repository import PROJECT_FIELDS
from devfolio.modules.project.schemas import ProjectUpdate
from devfolio.modules.user.models import User
from devfolio.modules.user.repository import PROFILE_FIELDS
from devfolio.modules.user.schemas import ProfileUpdate


def test_nothing_present_builds_no_statement():
    assert build_partial_update(User, PROFILE_FIELDS, ProfileUpdate(), User.id == uuid7()) is None


def test_only_present_fields_in_fixed_order():
    changes = ProfileUpdate.model_validate({"email": "Alice@Devfolio.dev", "bio": "", "name": "Alice"})
    values = changed_fields(changes, PROFILE_FIELDS)
    assert list(values) == ["name", "bio", "email"]
    assert values["bio"] == ""
    assert values["email"] == "alice@devfolio.dev"


def test_explicit_null_is_written():
    changes = ProjectUpdate.model_validate({"demo_url": None})
    assert changed_fields(changes, PROJECT_FIELDS) == {"demo_url": None}


def test_statement_sets_only_present_columns():
    changes = ProjectUpdate.model_validate({"is_featured": True, "title": "Renamed"})
    stmt = build_partial_update(Project, PROJECT_FIELDS, changes, Project.id == uuid7())
    sql = str(stmt)
    set_clause = sql.split(" WHERE ")[0]

    assert "title=" in set_clause
    assert "is_featured=" in set_clause
    assert set_clause.index("title=") < set_clause.index("is_featured=")
    for omitted in ("description=", "image_url=", "demo_url=", "github_url="):
        assert omitted not in set_clause
