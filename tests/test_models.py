import dataclasses

import pytest

from root_boot.models import BootDevice, UNKNOWN_MODEL


def test_boot_device_is_immutable():
    d = BootDevice(path='/dev/sda', model='SamsungSSD', size='500G')
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.path = '/dev/sdb'


def test_boot_device_requires_path():
    with pytest.raises(ValueError):
        BootDevice(path='', model='x', size='1G')


def test_boot_device_blank_model_placeholder_and_str():
    d = BootDevice(path='/dev/sdb', model='', size='1T')
    assert d.model == UNKNOWN_MODEL
    assert str(d) == 'Unknown 1T (/dev/sdb)'
