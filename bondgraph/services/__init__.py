from bondgraph.services.progress_services import ProgressStore
from bondgraph.services.level_services import LevelSession, list_level_summaries
