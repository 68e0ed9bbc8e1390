"""Model package initializer to ensure SQLAlchemy mappings are registered."""

# Import all model modules so relationship lookups resolve and
# Base.metadata knows every table before create_all runs.
from agroguide.db.models.plant import Plant  # noqa: F401
from agroguide.db.models.profile import Profile  # noqa: F401
from agroguide.db.models.feedback import Feedback  # noqa: F401
from agroguide.db.models.favorite import Favorite  # noqa: F401
from agroguide.db.models.search import Search  # noqa: F401
