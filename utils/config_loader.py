# ============================================================
# FILE: utils/config_loader.py
# ============================================================

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

class Config:
    def __init__(self, config_path: Optional[str] = "config.yaml", data: Optional[Dict[str, Any]] = None):
        self.config_path = Path(config_path) if config_path else None
        self.config = data if data is not None else self._load_config()
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        return cls(config_path=None, data=data)
    
    def _load_config(self) -> Dict[str, Any]:
        if self.config_path is None:
            return {}
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        
        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    
    def get(self, key: str, default=None):
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k, default)
            else:
                return default
        return value
    
    def reload(self):
        self.config = self._load_config()
