from abc import ABC, abstractmethod
from typing import Any, Dict, List


class JobSource(ABC):
    @abstractmethod
    def fetch_items(self) -> List[Dict[str, Any]]:
        pass
