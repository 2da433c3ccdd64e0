"""
Exceções do núcleo
"""
from typing import Any, List, Optional


class CollisionGuardError(Exception):
    """Base de todos os erros do sistema"""


class AgentValidationError(CollisionGuardError):
    """Relatório de agente rejeitado na ingestão (registro não é alterado)"""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class DetectionPreconditionError(CollisionGuardError):
    """Agente armazenado sem um campo exigido pelo detector"""

    def __init__(self, agent_id: str, field_name: str):
        super().__init__(
            f"Agent '{agent_id}' is missing '{field_name}' required for detection"
        )
        self.agent_id = agent_id
        self.field_name = field_name
