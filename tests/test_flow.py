import pytest

from root_boot.flow import BootFlow, State, MUTATION_FAILED_MESSAGE, NOT_RESOLVED_MESSAGE
from root_boot.models import BootDevice
from root_boot.platforms.common import InventoryError


SDA = BootDevice('/dev/sda', 'SamsungSSD', '500G')
SDB = BootDevice('/dev/sdb', 'Unknown', '1T')


class FakeManager:
    def __init__(self, devices=(SDA, SDB), target='0001', apply_result=(True, 'ok'), reboot_result=(True, 'ok')):
        self.devices = devices
        self.target = target
        self.apply_result = apply_result
        self.reboot_result = reboot_result
        self.calls = []

    def list_devices(self):
        self.calls.append(('list_devices',))
        if isinstance(self.devices, Exception):
            raise self.devices
        return self.devices

    def resolve_target(self, device):
        self.calls.append(('resolve_target', device))
        return self.target

    def apply_target(self, target):
        self.calls.append(('apply_target', target))
        return self.apply_result

    def reboot_now(self):
        self.calls.append(('reboot_now',))
        return self.reboot_result


def _flow(manager, select, sleeps=None, out=None):
    sleeps = [] if sleeps is None else sleeps
    out = [] if out is None else out
    return BootFlow(manager, select, sleep=sleeps.append, echo=out.append)


def test_full_run_sets_target_then_reboots():
    mgr = FakeManager()
    sleeps, out = [], []
    flow = _flow(mgr, lambda devices: devices[0], sleeps, out)

    assert flow.run() is State.DONE

    assert flow.history == [
        State.DISCOVERING, State.FILTERING, State.AWAITING_SELECTION,
        State.RESOLVING, State.MUTATING, State.REBOOTING, State.DONE,
    ]
    assert mgr.calls == [
        ('list_devices',), ('resolve_target', SDA), ('apply_target', '0001'), ('reboot_now',),
    ]
    assert sleeps == [5]
    assert 'Boot device set successfully.' in out
    assert 'Rebooting in 5 seconds...' in out
    assert flow.selected == SDA


def test_no_devices_found_stops_before_selection():
    mgr = FakeManager(devices=[])
    out = []

    def select(devices):
        raise AssertionError('selection must not be prompted')

    flow = _flow(mgr, select, out=out)

    assert flow.run() is State.NO_DEVICES_FOUND
    assert mgr.calls == [('list_devices',)]
    assert out == ['No bootable devices found.']


def test_exit_selection_touches_nothing():
    mgr = FakeManager()
    sleeps = []
    flow = _flow(mgr, lambda devices: None, sleeps)

    assert flow.run() is State.EXIT_REQUESTED
    assert mgr.calls == [('list_devices',)]
    assert sleeps == []


def test_unresolved_entry_still_reboots():
    mgr = FakeManager(target=None)
    out = []
    flow = _flow(mgr, lambda devices: devices[1], out=out)

    assert flow.run() is State.DONE
    assert State.MUTATING not in flow.history
    assert ('reboot_now',) in mgr.calls
    assert not any(c[0] == 'apply_target' for c in mgr.calls)
    assert NOT_RESOLVED_MESSAGE in out


def test_failed_mutation_warns_and_still_reboots():
    mgr = FakeManager(apply_result=(False, 'Access denied'))
    out = []
    flow = _flow(mgr, lambda devices: devices[0], out=out)

    assert flow.run() is State.DONE
    assert MUTATION_FAILED_MESSAGE in out
    assert mgr.calls[-1] == ('reboot_now',)


def test_failed_reboot_is_reported_not_raised():
    mgr = FakeManager(reboot_result=(False, 'no systemctl'))
    out = []
    flow = _flow(mgr, lambda devices: devices[0], out=out)

    assert flow.run() is State.DONE
    assert 'Reboot failed: no systemctl' in out


def test_custom_reboot_delay():
    sleeps, out = [], []
    flow = BootFlow(FakeManager(), lambda d: d[0], reboot_delay=0, sleep=sleeps.append, echo=out.append)
    flow.run()
    assert sleeps == [0]
    assert 'Rebooting in 0 seconds...' in out


def test_inventory_error_propagates():
    flow = _flow(FakeManager(devices=InventoryError('lsblk missing')), lambda d: d[0])
    with pytest.raises(InventoryError):
        flow.run()
    assert flow.history == [State.DISCOVERING]
