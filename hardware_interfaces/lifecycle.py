"""
Lifecycle Manager
=================

Reset and shutdown hooks, and the reset sweep that re-advertises every
adapter node in the store before pruning.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any

from hardware_interfaces.store import ObjectStore

logger = logging.getLogger(__name__)

RESET = "reset"
SHUTDOWN = "shutdown"
EVENT_KINDS = (RESET, SHUTDOWN)

Hook = Callable[[], Any]


@dataclass
class HookFailure:
    """A hook that raised during a lifecycle pass."""
    kind: str
    index: int
    hook_name: str
    error: BaseException


@dataclass
class HookReport:
    """Result of one reset or shutdown pass."""
    kind: str
    timestamp: float
    hooks_run: int = 0
    failures: List[HookFailure] = field(default_factory=list)
    nodes_readvertised: int = 0
    nodes_pruned: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _hook_name(hook: Hook) -> str:
    return getattr(hook, "__qualname__", None) or repr(hook)


class LifecycleManager:
    """
    Ordered reset/shutdown hooks.

    Hooks run synchronously in registration order. A failing hook is
    logged and skipped so the remaining adapters still reset or shut
    down.
    """

    def __init__(
        self,
        store: ObjectStore,
        readvertise_node: Callable[[str, str, str, str], Any],
        clear_object: Callable[[str], List[str]],
    ):
        self.store = store
        self._readvertise_node = readvertise_node
        self._clear_object = clear_object
        self._hooks: Dict[str, List[Hook]] = {kind: [] for kind in EVENT_KINDS}

    def add_event_listener(self, kind: str, callback: Hook) -> None:
        """Append a hook. Repeat registrations all fire."""
        if kind not in self._hooks:
            raise ValueError(f"Unknown lifecycle event {kind!r}, expected one of {EVENT_KINDS}")
        self._hooks[kind].append(callback)
        logger.debug(f"Added {kind} listener {_hook_name(callback)}")

    def hooks(self, kind: str) -> List[Hook]:
        """Registered hooks for `kind`, in firing order."""
        return list(self._hooks.get(kind, []))

    def _run_hooks(self, report: HookReport) -> HookReport:
        for index, hook in enumerate(list(self._hooks[report.kind])):
            report.hooks_run += 1
            try:
                hook()
            except Exception as e:
                logger.exception(f"{report.kind} hook {_hook_name(hook)} failed: {e}")
                report.failures.append(
                    HookFailure(kind=report.kind, index=index, hook_name=_hook_name(hook), error=e)
                )
        return report

    def reset(self) -> HookReport:
        """
        Re-advertise every adapter node by object id, prune each object,
        then run the reset hooks.

        Logic nodes and frame-bound nodes are left alone. Nodes survive
        even when the object's stored name no longer resolves.
        """
        report = HookReport(kind=RESET, timestamp=time.time())

        for object_id, obj in list(self.store.objects.items()):
            for frame in list(obj.frames.values()):
                for node in list(frame.nodes.values()):
                    if not node.is_adapter_owned:
                        continue
                    self._readvertise_node(object_id, frame.name, node.name, node.type)
                    report.nodes_readvertised += 1
            report.nodes_pruned.extend(self._clear_object(object_id))

        logger.info(
            f"Reset sweep: {report.nodes_readvertised} nodes re-advertised, "
            f"{len(report.nodes_pruned)} pruned"
        )
        return self._run_hooks(report)

    def shutdown(self) -> HookReport:
        """Run the shutdown hooks."""
        logger.info(f"Calling {len(self._hooks[SHUTDOWN])} shutdown hooks")
        return self._run_hooks(HookReport(kind=SHUTDOWN, timestamp=time.time()))
