"""The two scheduling strategies: frame-driven realtime and discrete-event batch."""

from clinicflow.engine.arrivals import MIN_ARRIVAL_STEP, JointArrival, JointArrivalProcess
from clinicflow.engine.batch import BatchEngine, run_simulation
from clinicflow.engine.realtime import Agent, RealtimeEngine

__all__ = [
    "Agent",
    "BatchEngine",
    "JointArrival",
    "JointArrivalProcess",
    "MIN_ARRIVAL_STEP",
    "RealtimeEngine",
    "run_simulation",
]
