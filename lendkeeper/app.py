"""Wire a ledger to its persistent storage."""

from lendkeeper.config import LedgerConfig
from lendkeeper.logging import get_logger
from lendkeeper.storage import JsonFileStorage, KeyValueStorage, LedgerArchive
from lendkeeper.store import Ledger

logger = get_logger(__name__)


def open_ledger(
    config: LedgerConfig | None = None,
    storage: KeyValueStorage | None = None,
) -> Ledger:
    """Load the persisted ledger and save it back after every mutation.

    Parameters
    ----------
    config : LedgerConfig | None
        Storage location and key (default: ``LedgerConfig()``).
    storage : KeyValueStorage | None
        Backend override; a ``JsonFileStorage`` at ``config.storage.path``
        is used when omitted.

    Returns
    -------
    Ledger
        Ledger whose ``on_change`` writes through ``LedgerArchive.save``.
    """
    config = config or LedgerConfig()
    if storage is None:
        storage = JsonFileStorage(config.storage.path)

    archive = LedgerArchive(storage, key=config.storage.key)
    loans = archive.load()
    logger.info("Opened ledger with %d loans", len(loans))
    return Ledger(loans=loans, on_change=archive.save)
