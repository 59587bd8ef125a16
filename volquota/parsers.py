"""
Parsers for vos output.

vos prints semi-structured text, and its layout depends on the server
implementation. Each dialect gets its own parser with the same two
entry points:

- parse_volume(lines): the record from 'vos examine', or None
- parse_server(lines): records from 'vos listvol', keyed by volume name

Parsing is best effort. Lines that do not fit are skipped, and no input
makes a parser raise. Only read-write instances produce records; an
entry without an observed size is never reported.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace

from volquota.core.config import Dialect


@dataclass(frozen=True)
class VolumeRecord:
    """Quota and usage of one volume, in kilobytes."""

    name: str
    size_kb: int | None = None
    quota_kb: int | None = None
    rw_server: str | None = None
    rw_partition: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if the size was observed."""
        return self.size_kb is not None


class VosParser:
    """Interface shared by the dialect parsers."""

    dialect: Dialect

    def parse_volume(self, lines: Iterable[str]) -> VolumeRecord | None:
        raise NotImplementedError

    def parse_server(self, lines: Iterable[str]) -> dict[str, VolumeRecord]:
        raise NotImplementedError


# user.jdoe    536871000 RW     900000 K  On-line
HEADER_RE = re.compile(r"^(\S+)\s+(\d+)\s+(RW|RO|BK)\s+(\d+)\s+K\s+On-line")
#     afs1.example.com /vicepb
PLACEMENT_RE = re.compile(r"^\s+(\S+)\s+(/vicep[a-z]+)\s*$")
#     MaxQuota    1000000 K
QUOTA_RE = re.compile(r"^\s+MaxQuota\s+(\d+)\s+K")


class PrimaryParser(VosParser):
    """Fixed-column tables printed by 'vos examine' and 'vos listvol -long'."""

    dialect = Dialect.PRIMARY

    def parse_volume(self, lines: Iterable[str]) -> VolumeRecord | None:
        record = None
        for line in lines:
            header = HEADER_RE.match(line)
            if header:
                if record is not None:
                    break
                if header.group(3) == "RW":
                    record = VolumeRecord(name=header.group(1), size_kb=int(header.group(4)))
                continue
            if record is None:
                continue
            record = self._apply_detail(record, line)
        return record

    def parse_server(self, lines: Iterable[str]) -> dict[str, VolumeRecord]:
        volumes: dict[str, VolumeRecord] = {}
        record = None
        rw = False

        for line in lines:
            header = HEADER_RE.match(line)
            if header:
                self._commit(volumes, record, rw)
                record = VolumeRecord(name=header.group(1), size_kb=int(header.group(4)))
                rw = header.group(3) == "RW"
            elif not line.strip() or not line[0].isspace():
                # blank line or unrecognised column-0 text closes the block
                self._commit(volumes, record, rw)
                record = None
            elif record is not None:
                record = self._apply_detail(record, line)

        self._commit(volumes, record, rw)
        return volumes

    @staticmethod
    def _apply_detail(record: VolumeRecord, line: str) -> VolumeRecord:
        quota = QUOTA_RE.match(line)
        if quota:
            return replace(record, quota_kb=int(quota.group(1)))
        placement = PLACEMENT_RE.match(line)
        if placement and record.rw_server is None:
            return replace(record, rw_server=placement.group(1), rw_partition=placement.group(2))
        return record

    @staticmethod
    def _commit(volumes: dict[str, VolumeRecord], record: VolumeRecord | None, rw: bool) -> None:
        if record is None or not rw:
            return
        if record.is_valid and record.quota_kb is not None:
            volumes[record.name] = record


BEGIN_MARKERS = ("BEGIN_OF_ENTRY", "BEGIN_ENTRY")
END_MARKER = "END_OF_ENTRY"


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class AlternateParser(VosParser):
    """Tab-separated key/value output of 'vos examine -format' and 'vos listvol -format'."""

    dialect = Dialect.ALTERNATE

    def parse_volume(self, lines: Iterable[str]) -> VolumeRecord | None:
        fields: dict[str, str] = {}
        for line in lines:
            pair = self._split(line)
            if pair is not None:
                fields.setdefault(*pair)
        return self._build(fields)

    def parse_server(self, lines: Iterable[str]) -> dict[str, VolumeRecord]:
        volumes: dict[str, VolumeRecord] = {}
        fields: dict[str, str] = {}

        for line in lines:
            marker = line.strip()
            if marker in BEGIN_MARKERS:
                fields = {}
                continue
            if marker == END_MARKER:
                record = self._build(fields)
                if record is not None and record.quota_kb is not None:
                    volumes[record.name] = record
                fields = {}
                continue
            pair = self._split(line)
            if pair is not None:
                fields[pair[0]] = pair[1]

        return volumes

    @staticmethod
    def _split(line: str) -> tuple[str, str] | None:
        key, sep, value = line.strip(" \r\n").partition("\t")
        if not sep or not key or " " in key:
            return None
        return key, value.strip("\t ")

    @staticmethod
    def _build(fields: dict[str, str]) -> VolumeRecord | None:
        name = fields.get("name")
        size = _to_int(fields.get("diskused"))
        if not name or size is None:
            return None
        if fields.get("type", "RW") != "RW":
            return None

        # serv is "<address>\t<hostname>"; keep the hostname
        server = fields.get("serv")
        if server:
            server = server.split("\t")[-1].strip() or None

        return VolumeRecord(
            name=name,
            size_kb=size,
            quota_kb=_to_int(fields.get("maxquota")),
            rw_server=server,
            rw_partition=fields.get("part") or None,
        )


PARSERS: dict[Dialect, type[VosParser]] = {
    Dialect.PRIMARY: PrimaryParser,
    Dialect.ALTERNATE: AlternateParser,
}


def get_parser(dialect: Dialect) -> VosParser:
    """Return the parser for a dialect."""
    return PARSERS[dialect]()


def filter_volumes(volumes: dict[str, VolumeRecord], pattern: str | None) -> dict[str, VolumeRecord]:
    """Keep volumes whose name matches pattern (re.search); all if no pattern."""
    if not pattern:
        return dict(volumes)
    regex = re.compile(pattern)
    return {name: record for name, record in volumes.items() if regex.search(name)}
