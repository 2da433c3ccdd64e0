"""Core components and configurations"""
from .config import (
    SystemConfig,
    PhysicsConfig,
    ModeDefaults,
    ServiceConfig,
    DemoConfig,
    ServerConfig,
    ReporterConfig
)
from .errors import CollisionGuardError, AgentValidationError, DetectionPreconditionError
from .modes import SystemMode, ControlMode, ModeSettings, ModeController
from .registry import Agent, DeviceRegistry
from .base import AgentStore, CollisionEngine, WarningsSource

__all__ = [
    'SystemConfig',
    'PhysicsConfig',
    'ModeDefaults',
    'ServiceConfig',
    'DemoConfig',
    'ServerConfig',
    'ReporterConfig',
    'CollisionGuardError',
    'AgentValidationError',
    'DetectionPreconditionError',
    'SystemMode',
    'ControlMode',
    'ModeSettings',
    'ModeController',
    'Agent',
    'DeviceRegistry',
    'AgentStore',
    'CollisionEngine',
    'WarningsSource'
]
