from dataclasses import dataclass


@dataclass(slots=True)
class ChainState:
    """Tracks the chain currently being resolved.

    resolving: set by a lock, cleared when the chain closes or nothing popped.
    depth: removal steps performed so far in this chain.
    settle_pending: a pop happened and gravity has not run yet.
    """

    resolving: bool = False
    depth: int = 0
    settle_pending: bool = False
