import os
import shutil
import tempfile
import unittest

from flexsubdir.mount_table import MountEntry, MountTable, ProcMounts, parse_mounts

PROC_MOUNTS = """\
sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
/dev/sda1 / ext4 rw,relatime 0 0
s1:/vol1 /var/lib/flexsubdir/mounts/s1-vol1 fuse.glusterfs rw,relatime 0 0
s1:/vol1 /pods/A/vol fuse.glusterfs rw,relatime 0 0
s1:/vol1 /pods/B/vol fuse.glusterfs rw,relatime 0 0
s9:/other /var/lib/flexsubdir/mounts/s9-other fuse.glusterfs rw,relatime 0 0
/dev/sdb1 /mnt/with\\040space ext4 rw 0 0
"""


class TestParseMounts(unittest.TestCase):
    def test_parses_device_and_target(self):
        entries = parse_mounts(PROC_MOUNTS.splitlines())
        self.assertIn(MountEntry("s1:/vol1", "/pods/A/vol"), entries)
        self.assertEqual(len(entries), 7)

    def test_decodes_escaped_spaces(self):
        entries = parse_mounts(PROC_MOUNTS.splitlines())
        self.assertEqual(entries[-1].target, "/mnt/with space")

    def test_skips_short_lines(self):
        self.assertEqual(parse_mounts(["", "garbage"]), [])


class TestMountTable(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmp_dir, "mounts")
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(PROC_MOUNTS)
        self.table = MountTable(ProcMounts(self.path))

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_is_mount_point(self):
        self.assertTrue(self.table.is_mount_point("/pods/A/vol"))
        self.assertTrue(self.table.is_mount_point("/pods/A/vol/"))
        self.assertFalse(self.table.is_mount_point("/pods/A"))
        self.assertFalse(self.table.is_mount_point("/pods/C/vol"))

    def test_device_backing(self):
        self.assertEqual(self.table.device_backing("/pods/B/vol"), "s1:/vol1")
        self.assertIsNone(self.table.device_backing("/pods/C/vol"))

    def test_mountpoint_of_device_under_root(self):
        self.assertEqual(
            self.table.mountpoint_of_device_under("s1:/vol1", "/var/lib/flexsubdir/mounts"),
            "/var/lib/flexsubdir/mounts/s1-vol1",
        )
        self.assertIsNone(self.table.mountpoint_of_device_under("s1:/vol1", "/elsewhere"))

    def test_count_entries_for_device(self):
        self.assertEqual(self.table.count_entries_for_device("s1:/vol1"), 3)
        self.assertEqual(self.table.count_entries_for_device("s9:/other"), 1)
        self.assertEqual(self.table.count_entries_for_device("nope"), 0)

    def test_reads_live_contents(self):
        with open(self.path, "a", encoding="utf-8") as f:
            f.write("s1:/vol1 /pods/C/vol fuse.glusterfs rw 0 0\n")
        self.assertTrue(self.table.is_mount_point("/pods/C/vol"))


if __name__ == "__main__":
    unittest.main()
