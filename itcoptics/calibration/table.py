"""
Calibration table lookups keyed by namespace and grating name.
"""

import itertools
import threading
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

import pandas as pd

from itcoptics.calibration.structures import (
    DispersionCurve,
    GratingRecord,
    TransmissionCurve,
    make_transmission_curve,
    validate_grating_record,
)
from itcoptics.core.abc import CalibrationSource
from itcoptics.core.cache import LRUCache, register_cache
from itcoptics.core.constants import DEFAULT_TABLE_SUFFIX, KNOWN_NAMESPACES, TRANSMISSION_TAG
from itcoptics.core.exceptions import DataCorruptError, NotFoundError
from itcoptics.core.logging_config import get_logger

logger = get_logger("calibration.table")

GRATING_COLUMNS = ["name", "resolving_power", "blaze", "resolution", "dispersion"]
TRANSMISSION_COLUMNS = ["wavelength", "transmission"]

_table_ids = itertools.count(1)


class InMemoryCalibrationTable(CalibrationSource):
    """
    Calibration source backed by dictionaries.

    Parameters
    ----------
    tables : mapping
        namespace -> {grating name -> GratingRecord}
    transmissions : mapping
        grating name -> TransmissionCurve, shared by all namespaces
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, GratingRecord]],
        transmissions: Mapping[str, TransmissionCurve],
    ):
        self._tables = {ns: dict(records) for ns, records in tables.items()}
        self._transmissions = dict(transmissions)

    @property
    def namespaces(self) -> FrozenSet[str]:
        return frozenset(self._tables)

    def list_gratings(self, namespace: str) -> List[str]:
        if namespace not in self._tables:
            raise NotFoundError(namespace)
        return sorted(self._tables[namespace])

    def resolve(self, namespace: str, grating_name: str) -> DispersionCurve:
        if namespace not in self._tables:
            raise NotFoundError(namespace)
        record = self._tables[namespace].get(grating_name)
        if record is None:
            raise NotFoundError(namespace, grating_name)
        transmission = self._transmissions.get(grating_name)
        if transmission is None:
            raise NotFoundError(
                namespace,
                grating_name,
                f"No transmission curve for grating '{grating_name}'",
            )

        validate_grating_record(record, namespace)
        transmission = make_transmission_curve(
            transmission.wavelength, transmission.transmission, namespace, grating_name
        )
        return DispersionCurve(namespace=namespace, grating=record, transmission=transmission)


class CalibrationTable(CalibrationSource):
    """
    File-backed calibration source.

    The directory holds one grating table per namespace and one
    transmission file per grating::

        <directory>/gratings.csv
        <directory>/eev_gratings.csv
        <directory>/B1200_G5301_trans.csv

    Grating tables have the columns ``name, resolving_power, blaze,
    resolution, dispersion``; transmission files have ``wavelength,
    transmission``. Lines starting with '#' are ignored.

    Resolved curves are cached, and a lock serializes loading so each key is
    read from disk at most once while it stays in the cache.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        namespaces: Iterable[str] = KNOWN_NAMESPACES,
        suffix: str = DEFAULT_TABLE_SUFFIX,
        cache_size: int = 64,
    ):
        """
        Initialize calibration table.

        Parameters
        ----------
        directory : str or Path
            Directory containing the calibration files
        namespaces : iterable of str
            Namespaces this table serves
        suffix : str
            File suffix of table files (default: '.csv')
        cache_size : int
            Maximum number of resolved curves kept in memory
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Calibration directory not found: {directory}")

        self.directory = directory
        self.suffix = suffix
        self._namespaces = frozenset(namespaces)
        self._tables: Dict[str, Dict[str, GratingRecord]] = {}
        self._lock = threading.RLock()
        self._cache = LRUCache(max_size=cache_size)

        # One registry entry per instance; clear_all_caches() then drops the
        # namespace tables together with the resolved curves
        self.cache_name = f"calibration:{directory}#{next(_table_ids)}"
        register_cache(self.cache_name, self)

        logger.info(
            f"Calibration table at {directory} " f"(namespaces={sorted(self._namespaces)})"
        )

    @property
    def namespaces(self) -> FrozenSet[str]:
        return self._namespaces

    def cache_stats(self) -> Dict[str, Any]:
        """Hit/miss statistics of the resolved-curve cache."""
        return self._cache.stats()

    def clear_cache(self) -> None:
        """Forget resolved curves and namespace tables so the next resolve rereads the files."""
        with self._lock:
            self._cache.clear()
            self._tables.clear()
        logger.debug(f"Cleared calibration cache {self.cache_name}")

    # Registry interface used by get_cache_stats() / clear_all_caches()
    stats = cache_stats
    clear = clear_cache

    def list_gratings(self, namespace: str) -> List[str]:
        with self._lock:
            return sorted(self._grating_table(namespace))

    def resolve(self, namespace: str, grating_name: str) -> DispersionCurve:
        """
        Get the dispersion and transmission data of a grating.

        Parameters
        ----------
        namespace : str
            Calibration namespace, one of `namespaces`
        grating_name : str
            Grating identifier

        Returns
        -------
        DispersionCurve
            The same object for repeated calls while cached

        Raises
        ------
        NotFoundError
            If the namespace, grating row or transmission file is missing
        DataCorruptError
            If the files cannot be parsed or violate the curve invariants
        """
        key = (namespace, grating_name)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug(f"Cache hit for {grating_name} in {namespace}")
                return cached

            table = self._grating_table(namespace)
            record = table.get(grating_name)
            if record is None:
                raise NotFoundError(namespace, grating_name)

            validate_grating_record(record, namespace)
            transmission = self._load_transmission(namespace, grating_name)
            curve = DispersionCurve(namespace=namespace, grating=record, transmission=transmission)
            self._cache.set(key, curve)

        logger.debug(
            f"Resolved {grating_name} in {namespace}: "
            f"dispersion={record.dispersion} nm/pix, domain={curve.domain}"
        )
        return curve

    def _grating_table(self, namespace: str) -> Dict[str, GratingRecord]:
        if namespace not in self._namespaces:
            raise NotFoundError(namespace)

        if namespace not in self._tables:
            path = self.directory / f"{namespace}{self.suffix}"
            if not path.exists():
                raise NotFoundError(namespace, None, f"Grating table not found: {path}")
            self._tables[namespace] = self._read_grating_table(path, namespace)
            logger.info(f"Loaded {len(self._tables[namespace])} gratings from {path}")

        return self._tables[namespace]

    @staticmethod
    def _read_grating_table(path: Path, namespace: str) -> Dict[str, GratingRecord]:
        df = _read_csv(path, namespace, None)

        missing = [c for c in GRATING_COLUMNS if c not in df.columns]
        if missing:
            raise DataCorruptError(namespace, None, f"{path.name} is missing columns {missing}")

        df["name"] = df["name"].astype(str).str.strip()
        if df["name"].duplicated().any():
            duplicates = sorted(df.loc[df["name"].duplicated(), "name"])
            raise DataCorruptError(namespace, None, f"duplicate gratings {duplicates}")

        try:
            for column in GRATING_COLUMNS[1:]:
                df[column] = pd.to_numeric(df[column])
        except (TypeError, ValueError) as e:
            raise DataCorruptError(namespace, None, f"non-numeric value in {path.name} ({e})")

        return {
            row.name: GratingRecord(
                name=row.name,
                dispersion=float(row.dispersion),
                resolving_power=float(row.resolving_power),
                blaze=float(row.blaze),
                resolution=float(row.resolution),
            )
            for row in df.itertuples(index=False)
        }

    def _load_transmission(self, namespace: str, grating_name: str) -> TransmissionCurve:
        path = self.directory / f"{grating_name}{TRANSMISSION_TAG}{self.suffix}"
        if not path.exists():
            raise NotFoundError(
                namespace, grating_name, f"Transmission file not found for '{grating_name}': {path}"
            )

        df = _read_csv(path, namespace, grating_name)
        missing = [c for c in TRANSMISSION_COLUMNS if c not in df.columns]
        if missing:
            raise DataCorruptError(namespace, grating_name, f"{path.name} is missing columns {missing}")

        return make_transmission_curve(
            df["wavelength"].to_numpy(), df["transmission"].to_numpy(), namespace, grating_name
        )


def _read_csv(path: Path, namespace: str, grating_name: Optional[str]) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, comment="#", skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataCorruptError(namespace, grating_name, f"cannot parse {path.name} ({e})")
    df.columns = [str(c).strip().lower() for c in df.columns]
    return df
