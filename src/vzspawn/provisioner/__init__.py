"""Provisioning and teardown of containers."""

from vzspawn.provisioner.orchestrator import ProvisioningOrchestrator, ProvisionPhase
from vzspawn.provisioner.readiness import ReadinessProbe
from vzspawn.provisioner.resources import ResourceConfigurator
from vzspawn.provisioner.teardown import TeardownController

__all__ = [
    "ProvisionPhase",
    "ProvisioningOrchestrator",
    "ReadinessProbe",
    "ResourceConfigurator",
    "TeardownController",
]
