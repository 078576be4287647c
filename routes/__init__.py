from flask import Blueprint

# single main blueprint for the catalog pages, debug tools have their own
main_bp = Blueprint("main", __name__)

#  import route modules so their handlers register on main_bp
from . import courses    # noqa: F401
