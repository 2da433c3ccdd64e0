"""
Modelos de entrada (validação na ingestão)
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

# Limites físicos: mantêm v² e as distâncias finitas em float
MAX_VELOCITY = 1e6
MAX_PLANAR = 1e12


class AgentReport(BaseModel):
    """Relatório de telemetria enviado por um dispositivo"""
    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(min_length=1)
    vehicle_type: StrictStr
    velocity: float = Field(ge=0, le=MAX_VELOCITY, allow_inf_nan=False)

    # Indoor (plano)
    x: Optional[float] = Field(default=None, ge=-MAX_PLANAR, le=MAX_PLANAR, allow_inf_nan=False)
    y: Optional[float] = Field(default=None, ge=-MAX_PLANAR, le=MAX_PLANAR, allow_inf_nan=False)

    # Outdoor (geográfico)
    lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)

    @model_validator(mode="after")
    def _require_position(self) -> "AgentReport":
        if (self.x is None) != (self.y is None):
            raise ValueError("x and y must be sent together")
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be sent together")
        if not self.has_planar and not self.has_geo:
            raise ValueError("either x/y or lat/lng is required")
        return self

    @property
    def has_planar(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def has_geo(self) -> bool:
        return self.lat is not None and self.lng is not None


class ModeChangeRequest(BaseModel):
    """Pedido de troca de modo (campos opcionais, texto case-insensitive)"""
    model_config = ConfigDict(extra="ignore")

    system_mode: Optional[StrictStr] = None
    control_mode: Optional[StrictStr] = None
