class InvalidGridState(ValueError):
    """Start/End missing, duplicated, overlapping each other or sitting on a wall."""


class UnknownAlgorithm(ValueError):
    pass
