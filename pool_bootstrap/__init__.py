from __future__ import annotations

from .constants import BASE_DIR, CONFIG_PATH, LOG_FILE, PACKAGE_PATH, DEFAULT_ENV_FILE
from .env_utils import BootstrapSettings, load_settings
from .errors import BootstrapError
from .executor import ProcessRunner
from .gateway import SuiGateway
from .consolidator import CoinConsolidator
from .orchestrator import BootstrapOrchestrator, PoolBootstrapState
from .config_writer import update_config
