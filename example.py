"""
Exemplos de uso do Collision Guard
"""
from core.config import SystemConfig
from server.service import CollisionService


def _print_warnings(service: CollisionService):
    snapshot, count = service.current_warnings()
    print(f"Active warnings: {count}")
    for agent_id, warning in sorted(snapshot.items()):
        print(
            f"  {agent_id} -> {warning.with_id}: "
            f"distance={warning.distance:.2f} safe={warning.safe_distance:.2f}"
        )


def example_1_indoor_risk():
    """Exemplo 1: Carro a 20 aproximando de um carro parado (indoor)"""
    print("="*60)
    print("EXEMPLO 1: Indoor risk")
    print("="*60)

    service = CollisionService()
    service.ingest_agent({"id": "A", "vehicle_type": "CAR", "velocity": 20, "x": 0, "y": 0})
    service.ingest_agent({"id": "B", "vehicle_type": "CAR", "velocity": 0, "x": 10, "y": 0})

    # Esperado: distance 10.00, safe 48.57
    _print_warnings(service)


def example_2_low_speed():
    """Exemplo 2: Dois agentes lentos nunca geram alerta"""
    print("="*60)
    print("EXEMPLO 2: Low-speed exclusion")
    print("="*60)

    service = CollisionService()
    service.ingest_agent({"id": "A", "vehicle_type": "CAR", "velocity": 3, "x": 0, "y": 0})
    service.ingest_agent({"id": "B", "vehicle_type": "CAR", "velocity": 3, "x": 10, "y": 0})

    _print_warnings(service)


def example_3_outdoor():
    """Exemplo 3: Modo outdoor com coordenadas geográficas"""
    print("="*60)
    print("EXEMPLO 3: Outdoor mode")
    print("="*60)

    config = SystemConfig()
    config.modes.system_mode = "OUTDOOR"

    service = CollisionService(config)
    service.ingest_agent({"id": "A", "vehicle_type": "CAR", "velocity": 40, "lat": 12.9, "lng": 77.5})
    service.ingest_agent({"id": "B", "vehicle_type": "BIKE", "velocity": 10, "lat": 12.9, "lng": 77.5})

    _print_warnings(service)


def example_4_control_modes():
    """Exemplo 4: Mesma cena em HUMAN, ADAS e AUTONOMOUS"""
    print("="*60)
    print("EXEMPLO 4: Control modes")
    print("="*60)

    service = CollisionService()
    service.ingest_agent({"id": "A", "vehicle_type": "CAR", "velocity": 30, "x": 0, "y": 0})
    service.ingest_agent({"id": "B", "vehicle_type": "BIKE", "velocity": 5, "x": 60, "y": 0})

    for mode in ("HUMAN", "ADAS", "AUTONOMOUS"):
        service.set_modes(control_mode=mode)
        print(f"\n🔧 {mode}")
        _print_warnings(service)


def example_5_demo_fleet():
    """Exemplo 5: Frota de demonstração aleatória"""
    print("="*60)
    print("EXEMPLO 5: Demo fleet")
    print("="*60)

    config = SystemConfig()
    config.demo.seed = 7
    config.demo.device_count = 8

    service = CollisionService(config)
    agents = service.simulate()

    for agent in sorted(agents, key=lambda a: a.id):
        print(f"  {agent.id}: {agent.vehicle_type} v={agent.velocity:.0f} at ({agent.x:.0f}, {agent.y:.0f})")
    _print_warnings(service)


def example_6_reporter():
    """Exemplo 6: Cliente de telemetria contra um servidor rodando"""
    print("="*60)
    print("EXEMPLO 6: Telemetry reporter")
    print("="*60)

    import time
    from reporting.reporter import TelemetryReporter

    config = SystemConfig()
    fast = TelemetryReporter.from_config("car_1", config.reporter)
    parked = TelemetryReporter.from_config("bike_1", config.reporter, vehicle_type="BIKE")

    print(f"Server: {fast.check_server()}")

    parked.update_state(velocity=0, x=30, y=0)
    parked.report_once()

    fast.start()
    try:
        for x in range(0, 30, 5):
            fast.update_state(velocity=25, x=x, y=0)
            time.sleep(config.reporter.interval)
            print(f"  x={x} warning={fast.latest_warning}")
    finally:
        fast.stop()


if __name__ == "__main__":
    import sys

    examples = {
        "1": example_1_indoor_risk,
        "2": example_2_low_speed,
        "3": example_3_outdoor,
        "4": example_4_control_modes,
        "5": example_5_demo_fleet,
        "6": example_6_reporter,
    }

    if len(sys.argv) < 2:
        print("\n🚀 Collision Guard - Examples\n")
        print("Usage: python example.py <number>\n")
        print("Available examples:")
        for num, func in examples.items():
            doc = func.__doc__ or "No description"
            print(f"  {num}. {doc}")
        print()
    else:
        example_num = sys.argv[1]
        if example_num in examples:
            examples[example_num]()
        else:
            print(f"❌ Example {example_num} not found")
