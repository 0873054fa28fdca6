"""
Evosnake Network Persistence Module

Saving and loading of champion networks. A network is stored as a single JSON
document (see 'Network.to_dict()').

Saving is gated by the 'save_best_net' configuration flag and creates missing
parent directories. Loading happens once, at startup, when resuming from a
previous champion: a missing or malformed file is a fatal PersistenceError.

Functions:
    save_network(network, config): Write the network to 'config.save_path'
    load_network(source):          Read a network from 'config.load_path' or a path
"""

import json
import logging
from pathlib import Path
from typing  import TYPE_CHECKING

from evosnake.errors           import PersistenceError
from evosnake.network.network  import Network
if TYPE_CHECKING:
    from evosnake.run.config import Config

logger = logging.getLogger(__name__)

def save_network(network: Network, config: 'Config') -> Path | None:
    """
    Write the network to the configured save path, if saving is enabled.

    Parameters:
        network: the network to persist
        config:  provides 'save_best_net' and 'save_path'

    Returns:
        The path written to, or None if saving is disabled
    """
    if not config.save_best_net:
        return None

    path = Path(config.save_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(network.to_dict(), f)

    logger.info("Saved network %s to %s", network.layer_sizes, path)
    return path

def load_network(source: 'Config | str | Path') -> Network:
    """
    Read a network previously written by 'save_network()'.

    Parameters:
        source: a Config (its 'load_path' is used) or an explicit file path

    Returns:
        The loaded network

    Raises:
        PersistenceError: if the file is missing, unreadable, or does not
                          describe a valid network
    """
    path = Path(source) if isinstance(source, (str, Path)) else Path(source.load_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PersistenceError(f"Cannot read network file '{path}': {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Network file '{path}' is not valid JSON: {e}") from e

    try:
        network = Network.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Network file '{path}' does not describe a valid network: {e}") from e

    logger.info("Loaded network %s from %s", network.layer_sizes, path)
    return network
