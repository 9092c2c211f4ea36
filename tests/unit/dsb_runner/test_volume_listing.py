"""Tests for mounted volume enumeration."""

from __future__ import annotations

from collections import namedtuple

import pytest

from dsb_runner.services import volumes
from dsb_runner.services.volumes import (
    UNKNOWN,
    VolumeInfo,
    human_bytes,
    linux_media_type,
    list_volumes,
    parse_diskutil_info,
    volume_for_path,
)

pytestmark = [pytest.mark.unit, pytest.mark.unit_runner]

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")

DISKUTIL_OUTPUT = """
   Device Identifier:         disk3s5
   Device Node:               /dev/disk3s5
   Volume Name:               Data
   File System Personality:   APFS
   Protocol:                  Apple Fabric
   Media Name:                AppleAPFSMedia
   Solid State:               Yes
"""


def test_parse_diskutil_info() -> None:
    media, filesystem = parse_diskutil_info(DISKUTIL_OUTPUT)
    assert filesystem == "APFS"
    assert "Apple Fabric" in media
    assert "AppleAPFSMedia" in media
    assert parse_diskutil_info("") == (UNKNOWN, UNKNOWN)


def test_human_bytes() -> None:
    assert human_bytes(512) == "512.0B"
    assert human_bytes(1536) == "1.5K"
    assert human_bytes(2 * 1024 ** 4) == "2.0T"


def test_linux_media_type_reads_sysfs(tmp_path) -> None:
    queue = tmp_path / "sdz" / "queue"
    queue.mkdir(parents=True)
    (queue / "rotational").write_text("1\n")
    (tmp_path / "sdz" / "removable").write_text("1\n")
    assert linux_media_type("/dev/sdz1", sys_block=tmp_path) == "Removable HDD"
    (queue / "rotational").write_text("0\n")
    (tmp_path / "sdz" / "removable").write_text("0\n")
    assert linux_media_type("/dev/sdz1", sys_block=tmp_path) == "SSD"
    assert linux_media_type("/dev/missing0", sys_block=tmp_path) == UNKNOWN


def test_list_volumes_skips_pseudo_and_system_volumes(mocker) -> None:
    mocker.patch.object(volumes, "linux_media_type", return_value="SSD")
    parts = [
        Partition("/dev/sda1", "/", "ext4", "rw"),
        Partition("tmpfs", "/run", "tmpfs", "rw"),
        Partition("/dev/sda2", "/boot/efi", "vfat", "rw"),
        Partition("/dev/loop0", "/snap/core/1", "squashfs", "ro"),
        Partition("/dev/sdb1", "/data", "xfs", "rw"),
        Partition("/dev/sdb1", "/data", "xfs", "rw"),
    ]
    result = list_volumes(
        system="Linux",
        partitions=lambda all=False: parts,
        disk_usage=lambda _mount: Usage(total=100 * 1024 ** 3, used=0, free=40 * 1024 ** 3, percent=60.0),
    )
    assert [vol.mount_path for vol in result] == ["/", "/data"]
    assert result[1].filesystem_kind == "xfs"
    assert result[1].media_type == "SSD"
    assert result[1].available_bytes == 40 * 1024 ** 3


def test_list_volumes_excludes_macos_system_volumes(mocker) -> None:
    mocker.patch.object(volumes, "_run", return_value=DISKUTIL_OUTPUT)
    parts = [
        Partition("/dev/disk3s1s1", "/", "apfs", "ro"),
        Partition("/dev/disk3s6", "/System/Volumes/VM", "apfs", "rw"),
        Partition("/dev/disk3s2", "/System/Volumes/Preboot", "apfs", "rw"),
        Partition("/dev/disk3s5", "/System/Volumes/Data", "apfs", "rw"),
    ]
    result = list_volumes(
        system="Darwin",
        partitions=lambda all=False: parts,
        disk_usage=lambda _mount: Usage(total=10, used=5, free=5, percent=50.0),
    )
    assert [vol.mount_path for vol in result] == ["/", "/System/Volumes/Data"]
    assert result[0].filesystem_kind == "APFS"


def test_volume_for_path_prefers_longest_mount(tmp_path) -> None:
    root = VolumeInfo("/", 1, 1, "/dev/sda1")
    nested = VolumeInfo(str(tmp_path.resolve()), 1, 1, "/dev/sdb1")
    assert volume_for_path(tmp_path / "sub", [root, nested]) is nested
    assert volume_for_path("/", [nested, root]) is root
    assert volume_for_path("/", [nested]) is None
