"""Tests for hypervisor command builders."""

import shlex

import pytest

from vzspawn.hypervisor.commands import (
    ADDRESS_PROBE_COMMAND,
    HypervisorCommands,
    user_bootstrap_commands,
)


@pytest.fixture
def commands():
    return HypervisorCommands()


class TestHypervisorCommands:
    """Test rendered command lines."""

    def test_create(self, commands):
        assert commands.create("abc-123", "web", "centos-7-x86_64") == (
            "/usr/sbin/vzctl create abc-123 --hostname web --ostemplate centos-7-x86_64"
        )

    def test_add_interface(self, commands):
        assert commands.add_interface("abc-123", 1) == (
            "/usr/sbin/vzctl set abc-123 --netif_add eth1 --save"
        )

    def test_set_network_dhcp(self, commands):
        assert commands.set_network("abc-123", "Bridged", 0, dhcp=True) == (
            "/usr/sbin/vzctl set abc-123 --network Bridged --ifname eth0 --dhcp yes --save"
        )

    def test_set_network_all_flags_combine(self, commands):
        """Test dhcp, ip and gw are not mutually exclusive."""
        command_line = commands.set_network(
            "abc-123", "Bridged", 0, dhcp=True, ip="10.0.0.7/24", gw="10.0.0.1"
        )
        assert command_line == (
            "/usr/sbin/vzctl set abc-123 --network Bridged --ifname eth0 "
            "--dhcp yes --ipadd 10.0.0.7/24 --gw 10.0.0.1 --save"
        )

    def test_set_network_no_flags(self, commands):
        assert commands.set_network("abc-123", "Internal", 2) == (
            "/usr/sbin/vzctl set abc-123 --network Internal --ifname eth2 --save"
        )

    def test_resource_commands(self, commands):
        assert commands.enable_netfilter("abc-123") == "/usr/bin/prlctl set abc-123 --netfilter full"
        assert commands.set_cpus("abc-123", 4) == "/usr/bin/prlctl set abc-123 --cpus 4"
        assert commands.set_memory("abc-123", "1G") == "/usr/bin/prlctl set abc-123 --memsize 1G"
        assert commands.set_disk("abc-123", "20G") == (
            "/usr/sbin/vzctl set abc-123 --diskspace 20G:20G --save"
        )

    def test_lifecycle_commands(self, commands):
        assert commands.start("abc-123") == "/usr/bin/prlctl start abc-123"
        assert commands.stop("abc-123") == "/usr/bin/prlctl stop abc-123"
        assert commands.destroy("abc-123") == "/usr/bin/prlctl destroy abc-123"

    def test_exec_commands_quote_inner_command(self, commands):
        """Test the in-container command reaches the tool as one argument."""
        command_line = commands.exec_in("abc-123", "useradd kitchen")
        assert command_line == "/usr/bin/prlctl exec abc-123 'useradd kitchen'"
        assert shlex.split(command_line)[-1] == "useradd kitchen"

        command_line = commands.diagnose("abc-123", ADDRESS_PROBE_COMMAND)
        assert command_line.startswith("/usr/sbin/vzctl exec abc-123 ")
        assert shlex.split(command_line)[-1] == ADDRESS_PROBE_COMMAND

    def test_values_are_shell_quoted(self, commands):
        """Test hostile configuration values cannot inject commands."""
        command_line = commands.create("abc-123", "web; reboot", "centos-7-x86_64")

        assert "'web; reboot'" in command_line
        assert shlex.split(command_line)[4] == "web; reboot"


class TestUserBootstrapCommands:
    """Test the in-container user setup sequence."""

    def test_sequence(self):
        bootstrap = user_bootstrap_commands("kitchen", "ssh-rsa AAAA kitchen_key")

        assert bootstrap == [
            "useradd kitchen",
            "mkdir /home/kitchen/.ssh",
            "chown kitchen: /home/kitchen/.ssh",
            "chmod 700 /home/kitchen/.ssh",
            "echo 'ssh-rsa AAAA kitchen_key' > /home/kitchen/.ssh/authorized_keys",
            "chown kitchen: /home/kitchen/.ssh/authorized_keys",
            "chmod 600 /home/kitchen/.ssh/authorized_keys",
            "mkdir -p /etc/sudoers.d",
            "echo 'kitchen ALL=(ALL) NOPASSWD:ALL' >> /etc/sudoers.d/kitchen",
            "chmod 0440 /etc/sudoers.d/kitchen",
        ]
