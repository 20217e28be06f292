from bondgraph.models.progress_model import ProgressRecord
