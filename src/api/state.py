from typing import Optional

from analysis.analysis_client import AnalysisClient
from storage.entity_store import EntityStore

# Global instances initialized at startup
entity_store: Optional[EntityStore] = None
analysis_client: Optional[AnalysisClient] = None
