import unittest

from flexsubdir.config import PluginConfig
from flexsubdir.errors import MountCommandError
from flexsubdir.mounter import CommandRunner, Mounter


class RecordingRunner:
    def __init__(self):
        self.commands = []

    def run(self, cmd):
        self.commands.append(list(cmd))


class TestMounter(unittest.TestCase):
    def setUp(self):
        self.runner = RecordingRunner()
        self.mounter = Mounter(PluginConfig(), self.runner)

    def test_volume_mount_with_backups(self):
        self.mounter.mount_volume("s1", "vol1", ("s2", "s3"), "/m/s1-vol1")
        self.assertEqual(
            self.runner.commands,
            [
                [
                    "mount",
                    "-t",
                    "glusterfs",
                    "-o",
                    "backup-volfile-servers=s2:s3",
                    "s1:/vol1",
                    "/m/s1-vol1",
                ]
            ],
        )

    def test_volume_mount_without_backups(self):
        self.mounter.mount_volume("s1", "vol1", (), "/m/s1-vol1")
        self.assertEqual(self.runner.commands, [["mount", "-t", "glusterfs", "s1:/vol1", "/m/s1-vol1"]])

    def test_bind_and_unmount(self):
        self.mounter.bind("/m/s1-vol1/00", "/pods/A/vol")
        self.mounter.unmount("/pods/A/vol")
        self.assertEqual(
            self.runner.commands,
            [["mount", "--bind", "/m/s1-vol1/00", "/pods/A/vol"], ["umount", "/pods/A/vol"]],
        )

    def test_configured_binaries(self):
        mounter = Mounter(
            PluginConfig(mount_bin="/sbin/mount", umount_bin="/sbin/umount", fs_type="nfs"),
            self.runner,
        )
        mounter.mount_volume("s1", "vol1", (), "/m/x")
        mounter.unmount("/m/x")
        self.assertEqual(self.runner.commands[0][:3], ["/sbin/mount", "-t", "nfs"])
        self.assertEqual(self.runner.commands[1], ["/sbin/umount", "/m/x"])


class TestCommandRunner(unittest.TestCase):
    def test_success(self):
        CommandRunner().run(["true"])

    def test_nonzero_exit(self):
        with self.assertRaises(MountCommandError) as ctx:
            CommandRunner().run(["false"])
        self.assertEqual(ctx.exception.returncode, 1)

    def test_missing_binary(self):
        with self.assertRaises(MountCommandError) as ctx:
            CommandRunner().run(["/nonexistent/flexsubdir-mount-helper"])
        self.assertEqual(ctx.exception.returncode, 127)


if __name__ == "__main__":
    unittest.main()
