from .api import api_blueprint
from .web import main_blueprint

__all__ = ['api_blueprint', 'main_blueprint']
