"""
Aplicação FastAPI: rotas HTTP sobre o CollisionService
"""
import json
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from core.config import ServerConfig
from core.errors import AgentValidationError, DetectionPreconditionError
from .schemas import ModeChangeRequest
from .service import CollisionService

logger = logging.getLogger(__name__)

ROUTES = [
    ("POST", "/api/update", "device data"),
    ("GET", "/api/devices", "all devices"),
    ("GET", "/api/warnings", "collision risks"),
    ("POST", "/api/mode", "change mode"),
    ("GET", "/api/status", "server health"),
    ("POST", "/api/simulate", "demo data"),
    ("POST", "/api/clear", "reset all"),
]


class BadRequest(Exception):
    """Corpo da requisição ilegível"""


async def _read_json(request: Request):
    body = await request.body()
    try:
        return json.loads(body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest(f"invalid JSON body: {e}") from e


def _error(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"error": message})


def create_app(service: CollisionService = None, config: ServerConfig = None) -> FastAPI:
    """
    Monta a aplicação

    Args:
        service: Serviço central (cria um com defaults se None)
        config: Configuração HTTP (CORS)
    """
    if service is None:
        service = CollisionService()
    if config is None:
        config = service.config.server

    app = FastAPI(title="Collision Guard")
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(BadRequest)
    async def _bad_request(request: Request, exc: BadRequest):
        return _error(400, str(exc))

    @app.exception_handler(AgentValidationError)
    async def _invalid_agent(request: Request, exc: AgentValidationError):
        return _error(400, str(exc))

    @app.exception_handler(DetectionPreconditionError)
    async def _detection_failed(request: Request, exc: DetectionPreconditionError):
        return _error(500, str(exc))

    @app.post("/api/update")
    async def update_device(request: Request):
        """Dispositivo envia posição e velocidade"""
        raw = await _read_json(request)
        agent = await run_in_threadpool(service.ingest_agent, raw)

        content = {"status": "ok"}
        warning = service.warning_for(agent.id)
        if warning is not None:
            content["warning"] = warning.to_dict()
        return JSONResponse(content=content)

    @app.get("/api/devices")
    def get_devices():
        """Todos os dispositivos rastreados"""
        agents = service.list_agents()
        return JSONResponse(content={
            "devices": [agent.to_dict() for agent in agents],
            "count": len(agents)
        })

    @app.get("/api/warnings")
    def get_warnings():
        """Alertas de colisão publicados"""
        snapshot, count = service.current_warnings()
        return JSONResponse(content={
            "warnings": {agent_id: w.to_dict() for agent_id, w in snapshot.items()},
            "risk_count": count
        })

    @app.post("/api/mode")
    async def change_mode(request: Request):
        """Troca modo de sistema e/ou de controle"""
        raw = await _read_json(request)
        if not isinstance(raw, dict):
            raise BadRequest("mode request must be a JSON object")
        try:
            change = ModeChangeRequest.model_validate(raw)
        except ValidationError as e:
            raise BadRequest(str(e)) from e

        system_mode, control_mode = await run_in_threadpool(
            service.set_modes, change.system_mode, change.control_mode
        )
        return JSONResponse(content={
            "system_mode": system_mode.value,
            "control_mode": control_mode.value
        })

    @app.get("/api/status")
    def get_status():
        """Health check"""
        return JSONResponse(content=service.status_snapshot().to_dict())

    @app.post("/api/simulate")
    def simulate():
        """Injeta dispositivos de demonstração"""
        agents = service.simulate()
        snapshot, _ = service.current_warnings()
        return JSONResponse(content={
            "status": "simulated",
            "devices_created": len(agents),
            "warnings": {agent_id: w.to_dict() for agent_id, w in snapshot.items()}
        })

    @app.api_route("/api/clear", methods=["POST", "DELETE"])
    def clear():
        """Remove todos os dispositivos e alertas"""
        service.reset_all()
        return JSONResponse(content={"status": "cleared"})

    return app
