# tourism_app/extensions.py
from flask_sqlalchemy import SQLAlchemy
from flask_migrate  import Migrate
from flask_restx import Api
from flask_caching import Cache

db      = SQLAlchemy()
migrate = Migrate()
api     = Api(
    title="Tourist Attractions API",
    version="1.0",
    description="Достопримечательности, локации и впечатления туристов",
    doc="/docs"
)
cache = Cache()
