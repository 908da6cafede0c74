"""winbootstrap — prepare a Windows workstation for an Ansible repository."""

__version__ = "0.1.0"
