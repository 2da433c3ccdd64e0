from core.config import SystemConfig
from main import CollisionGuardServer

config = SystemConfig()
config.server.port = 5000
config.demo.seed = 42

server = CollisionGuardServer(config)
server.run()
