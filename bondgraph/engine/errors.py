class PuzzleError(Exception):
    """Base class for puzzle engine errors"""


class CapacityExceeded(PuzzleError):
    """No pieces of the requested type are left to place"""

    def __init__(self, type_key: str):
        super().__init__(f"No '{type_key}' pieces left to place")
        self.type_key = type_key


class UnknownPieceType(PuzzleError):
    def __init__(self, type_key: str):
        super().__init__(f"Unknown piece type '{type_key}'")
        self.type_key = type_key


class UnknownNode(PuzzleError):
    def __init__(self, node_id: int):
        super().__init__(f"Node {node_id} does not exist")
        self.node_id = node_id


class MoveRejected(PuzzleError):
    """Moving the node would make two edges cross"""

    def __init__(self, node_id: int, position):
        super().__init__(f"Moving node {node_id} to {position} would cross an edge")
        self.node_id = node_id
        self.position = position


class UnknownLevel(PuzzleError):
    def __init__(self, level_key: str):
        super().__init__(f"Level '{level_key}' not found")
        self.level_key = level_key


class LevelLocked(PuzzleError):
    def __init__(self, level_key: str):
        super().__init__(f"Level '{level_key}' is locked")
        self.level_key = level_key


class LevelReadOnly(PuzzleError):
    """Level is solved and shown read-only until it is redone"""

    def __init__(self, level_key: str):
        super().__init__(f"Level '{level_key}' is solved, redo it to play again")
        self.level_key = level_key


class InvalidPosition(PuzzleError):
    """Coordinates must be finite numbers"""

    def __init__(self, position):
        super().__init__(f"Invalid position {position}")
        self.position = position
