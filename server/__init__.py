"""HTTP service around the collision core"""
from .service import CollisionService, StatusSnapshot
from .schemas import AgentReport, ModeChangeRequest
from .simulation import DemoFleet
from .api import create_app, ROUTES

__all__ = [
    'CollisionService',
    'StatusSnapshot',
    'AgentReport',
    'ModeChangeRequest',
    'DemoFleet',
    'create_app',
    'ROUTES'
]
