"""Firstboot provisioning agent.

Runs once on a freshly imaged Windows host:
- Wait for the provisioning network
- Look up per-device network facts by serial number
- Partition, rename, re-address, tweak the registry
- Report progress, then reboot
"""

__version__ = "1.2.1"

__all__ = ["__version__"]
