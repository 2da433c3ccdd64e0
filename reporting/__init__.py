"""Telemetry reporting client"""
from .reporter import TelemetryReporter

__all__ = ['TelemetryReporter']
