from core.registry import Agent


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def make_agent(agent_id, velocity, x=None, y=None, lat=None, lng=None, vehicle_type="CAR"):
    return Agent(
        id=agent_id,
        vehicle_type=vehicle_type,
        velocity=float(velocity),
        x=x,
        y=y,
        lat=lat,
        lng=lng,
    )
