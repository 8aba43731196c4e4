from flask_smorest import Blueprint

bp = Blueprint("api", __name__, description="Highsoft spa API")

from . import clients  # noqa: E402,F401
from . import users  # noqa: E402,F401
from . import roles  # noqa: E402,F401
