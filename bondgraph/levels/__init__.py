from bondgraph.levels.catalog import LEVELS, get_level, list_levels
