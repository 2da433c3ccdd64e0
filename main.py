"""
Servidor de Prevenção de Colisões - Main
Integração de registro, modos, detecção e transporte HTTP
"""
import logging

import uvicorn

from core.config import SystemConfig
from server.api import ROUTES, create_app
from server.service import CollisionService
from utils.logs import setup_logging

logger = logging.getLogger(__name__)


class CollisionGuardServer:
    """Processo principal do servidor"""

    def __init__(self, config: SystemConfig = None):
        """
        Args:
            config: Configuração do sistema (usa defaults se None)
        """
        if config is None:
            config = SystemConfig()

        self.config = config

        setup_logging(
            enable_logging=config.enable_logging,
            log_file=config.log_file,
            level=config.server.log_level
        )

        # Inicializa componentes
        self._init_components()

    def _init_components(self):
        """Inicializa todos os componentes"""

        print("\n[1/2] Initializing collision service...")
        self.service = CollisionService(self.config)
        settings = self.service.modes.settings()
        print(f"   Modes: {settings.system_mode.value} / {settings.control_mode.value}")
        if self.config.service.serialize_recompute:
            print("   Recompute: serialized")

        print("\n[2/2] Initializing HTTP app...")
        self.app = create_app(self.service, self.config.server)

        print("\n✅ All systems ready\n")

    def print_banner(self):
        host = self.config.server.host
        port = self.config.server.port
        print("=" * 60)
        print("🚦 COLLISION PREVENTION SERVER")
        print(f"   http://{host}:{port}")
        print("=" * 60)
        for method, path, description in ROUTES:
            print(f"   {method:<5} {path:<15} {description}")
        print("=" * 60)

    def run(self):
        """Bloqueia servindo HTTP até Ctrl+C"""
        self.print_banner()
        logger.info("Serving on %s:%d", self.config.server.host, self.config.server.port)
        try:
            uvicorn.run(
                self.app,
                host=self.config.server.host,
                port=self.config.server.port,
                log_level=self.config.server.log_level
            )
        finally:
            status = self.service.status_snapshot()
            print("\n" + "=" * 60)
            print("📊 FINAL STATE")
            print("=" * 60)
            print(f"Tracked devices: {status.agent_count}")
            print(f"Active warnings: {status.active_warning_count}")
            print("=" * 60)


def main():
    """Entry point"""

    # Configuração customizada (opcional)
    config = SystemConfig()

    # Exemplos de customização:
    # config.server.port = 8000
    # config.modes.system_mode = "OUTDOOR"
    # config.service.serialize_recompute = True

    server = CollisionGuardServer(config)
    server.run()


if __name__ == "__main__":
    main()
