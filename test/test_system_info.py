"""Tests for system_info."""

import json
import sys


class TestSystemInfo:
    def test_snapshot_fields(self, dispatcher):
        text = dispatcher.call_tool("system_info", {}).joined_text
        info = json.loads(text)
        assert set(info) == {
            "platform",
            "arch",
            "cpus",
            "totalMem",
            "freeMem",
            "uptime",
            "loadavg",
            "networkInterfaces",
        }
        assert info["platform"] == sys.platform
        assert info["totalMem"] >= info["freeMem"] > 0
        assert info["uptime"] > 0
        assert len(info["loadavg"]) == 3

    def test_pretty_printed(self, dispatcher):
        text = dispatcher.call_tool("system_info", {}).joined_text
        assert text.startswith("{\n  ")

    def test_cpus(self, dispatcher):
        cpus = json.loads(dispatcher.call_tool("system_info", {}).joined_text)["cpus"]
        assert cpus
        for cpu in cpus:
            assert set(cpu) == {"model", "speed", "times"}
            assert set(cpu["times"]) == {"user", "nice", "sys", "idle", "irq"}

    def test_network_interfaces(self, dispatcher):
        ifaces = json.loads(dispatcher.call_tool("system_info", {}).joined_text)["networkInterfaces"]
        assert isinstance(ifaces, dict)
        for records in ifaces.values():
            for rec in records:
                assert rec["family"] in {"IPv4", "IPv6"}
                assert isinstance(rec["internal"], bool)

    def test_ignores_extra_arguments(self, dispatcher):
        json.loads(dispatcher.call_tool("system_info", {"verbose": True}).joined_text)
