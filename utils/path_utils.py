import os
from pathlib import Path


# 项目根目录
BASE_DIR = Path(__file__).resolve().parents[1]

# 常用子目录路径，配置目录可通过环境变量覆盖
CONFIG_DIR = Path(os.environ.get("QUOTE_APP_CONFIG_DIR", BASE_DIR / 'config'))
LOG_DIR = BASE_DIR / 'log'
DATA_DIR = BASE_DIR / 'data'
EXPORT_DIR = BASE_DIR / 'exports'


def resolve_path(path: str) -> Path:
    """相对路径按项目根目录解析"""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return BASE_DIR / candidate
