"""
Cliente de telemetria: reporta periodicamente o estado de um agente
"""
import logging
import threading
from typing import Dict, Optional

import requests

from core.config import ReporterConfig

logger = logging.getLogger(__name__)


class TelemetryReporter:
    """Envia o último estado de um dispositivo para /api/update"""

    def __init__(
        self,
        agent_id: str,
        vehicle_type: str = "CAR",
        base_url: str = "http://localhost:5000",
        interval: float = 1.0,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            agent_id: Id do dispositivo (fixo durante a vida do reporter)
            vehicle_type: CAR, BIKE, ...
            base_url: Endereço do servidor
            interval: Segundos entre relatórios
            timeout: Timeout de cada requisição
            session: Sessão requests (cria uma se None)
        """
        self.agent_id = agent_id
        self.vehicle_type = vehicle_type
        self.base_url = base_url.rstrip("/")
        self.interval = interval
        self.timeout = timeout
        self.session = session or requests.Session()

        self._state_lock = threading.Lock()
        self._state: Dict = {}
        self._stop = threading.Event()
        self.worker_thread: Optional[threading.Thread] = None

        self.report_count = 0
        self.error_count = 0
        self.latest_warning: Optional[Dict] = None

    @classmethod
    def from_config(cls, agent_id: str, config: ReporterConfig, **kwargs) -> "TelemetryReporter":
        return cls(
            agent_id,
            base_url=config.base_url,
            interval=config.interval,
            timeout=config.timeout,
            **kwargs
        )

    def check_server(self) -> Dict:
        """
        Verifica se o servidor está no ar

        Raises:
            RuntimeError: se o servidor não responde
        """
        try:
            response = self.session.get(f"{self.base_url}/api/status", timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            raise RuntimeError(f"Server offline at {self.base_url}") from e

        if response.status_code != 200:
            raise RuntimeError(f"Server answered with status {response.status_code}")
        return response.json()

    def update_state(
        self,
        velocity: float,
        x: Optional[float] = None,
        y: Optional[float] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None
    ) -> None:
        """Atualiza o estado que será enviado no próximo relatório"""
        state = {"velocity": velocity}
        for key, value in (("x", x), ("y", y), ("lat", lat), ("lng", lng)):
            if value is not None:
                state[key] = value
        with self._state_lock:
            self._state = state

    def build_payload(self) -> Dict:
        with self._state_lock:
            state = dict(self._state)
        return {"id": self.agent_id, "vehicle_type": self.vehicle_type, **state}

    def report_once(self) -> Dict:
        """
        Envia um relatório síncrono

        Returns:
            Resposta do servidor ({"status": "ok", "warning": {...}?})

        Raises:
            ValueError: se nenhum estado foi definido
            requests.HTTPError: se o servidor rejeita o relatório
        """
        if not self._state:
            raise ValueError("update_state() must be called before reporting")

        response = self.session.post(
            f"{self.base_url}/api/update",
            json=self.build_payload(),
            timeout=self.timeout
        )
        response.raise_for_status()

        result = response.json()
        self.report_count += 1
        self.latest_warning = result.get("warning")
        if self.latest_warning:
            logger.warning(
                "Collision risk for %s with %s (distance %.2f < safe %.2f)",
                self.agent_id,
                self.latest_warning["with"],
                self.latest_warning["distance"],
                self.latest_warning["safe_distance"]
            )
        return result

    def _worker(self):
        """Thread worker de envio periódico"""
        while not self._stop.is_set():
            try:
                self.report_once()
            except (requests.exceptions.RequestException, ValueError) as e:
                self.error_count += 1
                logger.error("Report from %s failed: %s", self.agent_id, e)
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self.worker_thread is not None and self.worker_thread.is_alive():
            return
        self._stop.clear()
        self.worker_thread = threading.Thread(
            target=self._worker,
            name=f"reporter-{self.agent_id}",
            daemon=True
        )
        self.worker_thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self.worker_thread is not None:
            self.worker_thread.join(timeout)
            self.worker_thread = None
