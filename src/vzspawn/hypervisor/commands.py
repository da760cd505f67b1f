"""Command-line builders for the Virtuozzo tools.

Every hypervisor action has one template. Values coming from configuration
are passed through the ``quote`` filter so nothing outside this module has to
care about shell escaping.
"""

import logging
import shlex
from typing import List, Optional

from vzspawn.utils.templates import render_template


logger = logging.getLogger(__name__)

PRLCTL = "/usr/bin/prlctl"
VZCTL = "/usr/sbin/vzctl"

ADDRESS_PROBE_COMMAND = "/sbin/ip -o -f inet addr show dev eth0"

TEMPLATES = {
    "create": "{{ vzctl }} create {{ ct_id|quote }} --hostname {{ hostname|quote }} --ostemplate {{ ostemplate|quote }}",
    "add_interface": "{{ vzctl }} set {{ ct_id|quote }} --netif_add {{ ifname|quote }} --save",
    "set_network": (
        "{{ vzctl }} set {{ ct_id|quote }} --network {{ network|quote }} --ifname {{ ifname|quote }} "
        "{% if dhcp %}--dhcp yes {% endif %}"
        "{% if ip %}--ipadd {{ ip|quote }} {% endif %}"
        "{% if gw %}--gw {{ gw|quote }} {% endif %}"
        "--save"
    ),
    "enable_netfilter": "{{ prlctl }} set {{ ct_id|quote }} --netfilter full",
    "set_cpus": "{{ prlctl }} set {{ ct_id|quote }} --cpus {{ cpus|quote }}",
    "set_memory": "{{ prlctl }} set {{ ct_id|quote }} --memsize {{ memory|quote }}",
    "set_disk": "{{ vzctl }} set {{ ct_id|quote }} --diskspace {{ (disk ~ ':' ~ disk)|quote }} --save",
    "start": "{{ prlctl }} start {{ ct_id|quote }}",
    "stop": "{{ prlctl }} stop {{ ct_id|quote }}",
    "destroy": "{{ prlctl }} destroy {{ ct_id|quote }}",
    "exec_in": "{{ prlctl }} exec {{ ct_id|quote }} {{ command|quote }}",
    "diagnose": "{{ vzctl }} exec {{ ct_id|quote }} {{ command|quote }}",
}


def interface_name(index: int) -> str:
    """Name of the container interface at ``index``."""
    return f"eth{index}"


class HypervisorCommands:
    """Builds prlctl/vzctl command lines, one method per action."""

    def __init__(self, prlctl: str = PRLCTL, vzctl: str = VZCTL):
        self.prlctl = prlctl
        self.vzctl = vzctl

    def _render(self, action: str, **context) -> str:
        command_line = render_template(
            TEMPLATES[action], prlctl=self.prlctl, vzctl=self.vzctl, **context
        )
        logger.debug(f"Built {action} command: {command_line}")
        return command_line

    def create(self, ct_id: str, hostname: str, ostemplate: str) -> str:
        return self._render("create", ct_id=ct_id, hostname=hostname, ostemplate=ostemplate)

    def add_interface(self, ct_id: str, index: int) -> str:
        return self._render("add_interface", ct_id=ct_id, ifname=interface_name(index))

    def set_network(
        self,
        ct_id: str,
        network: str,
        index: int,
        dhcp: bool = False,
        ip: Optional[str] = None,
        gw: Optional[str] = None,
    ) -> str:
        """Configure one interface; dhcp, ip and gw may be combined freely."""
        return self._render(
            "set_network",
            ct_id=ct_id,
            network=network,
            ifname=interface_name(index),
            dhcp=dhcp,
            ip=ip,
            gw=gw,
        )

    def enable_netfilter(self, ct_id: str) -> str:
        return self._render("enable_netfilter", ct_id=ct_id)

    def set_cpus(self, ct_id: str, cpus: int) -> str:
        return self._render("set_cpus", ct_id=ct_id, cpus=cpus)

    def set_memory(self, ct_id: str, memory: str) -> str:
        return self._render("set_memory", ct_id=ct_id, memory=memory)

    def set_disk(self, ct_id: str, disk: str) -> str:
        """Apply ``disk`` as both the soft and the hard limit."""
        return self._render("set_disk", ct_id=ct_id, disk=disk)

    def start(self, ct_id: str) -> str:
        return self._render("start", ct_id=ct_id)

    def stop(self, ct_id: str) -> str:
        return self._render("stop", ct_id=ct_id)

    def destroy(self, ct_id: str) -> str:
        return self._render("destroy", ct_id=ct_id)

    def exec_in(self, ct_id: str, command: str) -> str:
        """Run a shell command inside the container through prlctl."""
        return self._render("exec_in", ct_id=ct_id, command=command)

    def diagnose(self, ct_id: str, command: str) -> str:
        """Run a shell command inside the container through vzctl."""
        return self._render("diagnose", ct_id=ct_id, command=command)


def user_bootstrap_commands(username: str, public_key: str) -> List[str]:
    """Shell commands, run inside the container, that create a sudo-capable login user."""
    user = shlex.quote(username)
    ssh_dir = f"/home/{user}/.ssh"
    authorized_keys = f"{ssh_dir}/authorized_keys"
    sudoers_file = f"/etc/sudoers.d/{user}"
    return [
        f"useradd {user}",
        f"mkdir {ssh_dir}",
        f"chown {user}: {ssh_dir}",
        f"chmod 700 {ssh_dir}",
        f"echo {shlex.quote(public_key)} > {authorized_keys}",
        f"chown {user}: {authorized_keys}",
        f"chmod 600 {authorized_keys}",
        "mkdir -p /etc/sudoers.d",
        f"echo {shlex.quote(f'{username} ALL=(ALL) NOPASSWD:ALL')} >> {sudoers_file}",
        f"chmod 0440 {sudoers_file}",
    ]