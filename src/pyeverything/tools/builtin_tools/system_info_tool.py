from __future__ import annotations

import ipaddress
import json
import os
import platform
import socket
import sys
import time
from dataclasses import dataclass
from typing import Any

import psutil

from ..base import ToolContext, ToolResult, ToolSpec

_FAMILIES = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def _cpu_model() -> str:
    model = platform.processor()
    if model:
        return model
    # Linux leaves platform.processor() empty; /proc/cpuinfo has the name.
    try:
        with open("/proc/cpuinfo", encoding="utf-8", errors="replace") as f:
            for line in f:
                if line.lower().startswith("model name"):
                    return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.machine()


def _cpus() -> list[dict[str, Any]]:
    model = _cpu_model()
    times = psutil.cpu_times(percpu=True)
    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (AttributeError, NotImplementedError, OSError):
        freqs = []

    out = []
    for i, t in enumerate(times):
        speed = 0
        if i < len(freqs) and freqs[i] is not None:
            speed = int(freqs[i].current)
        elif len(freqs) == 1:
            speed = int(freqs[0].current)
        out.append({
            "model": model,
            "speed": speed,
            # milliseconds, like most per-core counters reported elsewhere
            "times": {
                "user": int(t.user * 1000),
                "nice": int(getattr(t, "nice", 0.0) * 1000),
                "sys": int(t.system * 1000),
                "idle": int(t.idle * 1000),
                "irq": int(getattr(t, "irq", 0.0) * 1000),
            },
        })
    return out


def _cidr(address: str, netmask: str | None) -> str | None:
    if not netmask:
        return None
    try:
        iface = ipaddress.ip_interface(f"{address.split('%', 1)[0]}/{netmask}")
    except ValueError:
        return None
    return f"{address}/{iface.network.prefixlen}"


def _network_interfaces() -> dict[str, list[dict[str, Any]]]:
    addrs = psutil.net_if_addrs()
    out: dict[str, list[dict[str, Any]]] = {}
    for name, items in addrs.items():
        macs = [a.address for a in items if a.family == psutil.AF_LINK]
        mac = macs[0] if macs else "00:00:00:00:00:00"
        records = []
        for a in items:
            family = _FAMILIES.get(a.family)
            if family is None:
                continue
            try:
                internal = ipaddress.ip_address(a.address.split("%", 1)[0]).is_loopback
            except ValueError:
                internal = False
            records.append({
                "address": a.address,
                "netmask": a.netmask,
                "family": family,
                "mac": mac,
                "internal": internal,
                "cidr": _cidr(a.address, a.netmask),
            })
        out[name] = records
    return out


def _loadavg() -> list[float]:
    try:
        return [float(x) for x in os.getloadavg()]
    except (AttributeError, OSError):
        # Not available on Windows.
        return [0.0, 0.0, 0.0]


def collect_system_info() -> dict[str, Any]:
    vm = psutil.virtual_memory()
    return {
        "platform": sys.platform,
        "arch": platform.machine(),
        "cpus": _cpus(),
        "totalMem": int(vm.total),
        "freeMem": int(vm.available),
        "uptime": round(time.time() - psutil.boot_time(), 2),
        "loadavg": _loadavg(),
        "networkInterfaces": _network_interfaces(),
    }


@dataclass
class SystemInfoTool:
    spec: ToolSpec = ToolSpec(
        name="system_info",
        description="Get system information",
        parameters={"type": "object", "properties": {}},
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        return ToolResult.text(json.dumps(collect_system_info(), ensure_ascii=False, indent=2))
