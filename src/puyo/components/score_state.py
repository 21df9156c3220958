from dataclasses import dataclass


@dataclass(slots=True)
class ScoreState:
    score: int = 0
    max_chain: int = 0
    last_step_points: int = 0
