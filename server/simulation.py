"""
Geração de frota de demonstração
"""
import threading

import numpy as np
from typing import Dict, List, Optional

from core.config import DemoConfig

VEHICLE_TYPES = ("CAR", "BIKE")


class DemoFleet:
    """Gera relatórios aleatórios de dispositivos para demonstração"""

    def __init__(self, config: DemoConfig = None):
        self.config = config or DemoConfig()
        self.rng = np.random.default_rng(self.config.seed)
        # Generator do numpy não é thread-safe
        self._lock = threading.Lock()

    def generate(self, count: Optional[int] = None) -> List[Dict]:
        """
        Args:
            count: Número de dispositivos (usa config.device_count se None)

        Returns:
            Lista de relatórios crus device_1..device_n com x/y e lat/lng
        """
        if count is None:
            count = self.config.device_count

        reports = []
        with self._lock:
            for i in range(1, count + 1):
                reports.append({
                    "id": f"device_{i}",
                    "vehicle_type": VEHICLE_TYPES[int(self.rng.integers(0, len(VEHICLE_TYPES)))],
                    "velocity": float(self.rng.integers(10, 70)),
                    "x": float(self.rng.integers(0, 200)),
                    "y": float(self.rng.integers(0, 200)),
                    "lat": 12.9 + float(self.rng.random()) * 0.01,
                    "lng": 77.5 + float(self.rng.random()) * 0.01,
                })
        return reports
