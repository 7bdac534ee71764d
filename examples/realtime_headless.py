"""Drive the realtime engine without a renderer.

A host animation loop normally calls ``update(dt)`` once per frame with the
scaled wall-clock delta. This script does the same with a fixed frame length
and prints what a dashboard would show every simulated hour.

Usage:
    python examples/realtime_headless.py --frame 0.25 --speed 4
"""

from __future__ import annotations

import argparse

import clinicflow
from clinicflow import ClinicConfig, RealtimeEngine


def print_status(snap: clinicflow.RealtimeSnapshot) -> None:
    stats = snap.stats
    waiting = {room.name: len(room.queue) for room in snap.rooms if room.kind == "SERVICE"}
    print(
        f"t={snap.time:6.1f}  in clinic={len(snap.patients):3d}"
        f"  std {stats.std_finished:3d}/{stats.std_arrived:3d}"
        f"  ai {stats.ai_finished:3d}/{stats.ai_arrived:3d}"
        f"  doctor util std={stats.std_doctor_utilization_percent:5.1f}%"
        f" ai={stats.ai_doctor_utilization_percent:5.1f}%"
    )
    print("         queues: " + ", ".join(f"{name}={n}" for name, n in waiting.items()))


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless realtime clinic simulation")
    parser.add_argument("--frame", type=float, default=1 / 60, help="Wall seconds per frame")
    parser.add_argument("--speed", type=float, default=2.0, help="Simulated minutes per wall second")
    parser.add_argument("--duration", type=float, default=480.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str, default=None)
    args = parser.parse_args()

    if args.log_level:
        clinicflow.enable_console_logging(level=args.log_level)

    engine = RealtimeEngine(ClinicConfig(duration_minutes=args.duration), seed=args.seed)
    dt = args.frame * args.speed
    next_report = 60.0

    while not engine.is_finished:
        engine.update(dt)
        if engine.time >= next_report:
            print_status(engine.snapshot())
            next_report += 60.0

    snap = engine.snapshot()
    print_status(snap)
    print()
    print(engine.history_frame().tail(12).to_string())


if __name__ == "__main__":
    main()
