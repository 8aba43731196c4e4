from core.db import db
from flask_migrate import Migrate
from flask_smorest import Api

migrate = Migrate()
api = Api()

__all__ = ["api", "db", "migrate"]
