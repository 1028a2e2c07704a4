# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Callable


class OneShotEvent:
	"""
	A signal that fires exactly once.

	Listeners subscribed before the event fires run in subscription order when
	it fires. Listeners subscribed afterwards run immediately, so "run once all
	declarations are known" holds no matter when the subscription happens.
	Firing a second time is a no-op.
	"""

	def __init__(self, name: str) -> None:
		self.name = name
		self._fired = False
		self._listeners: list[Callable[[], None]] = []

	@property
	def fired(self) -> bool:
		return self._fired

	def subscribe(self, listener: Callable[[], None]) -> None:
		if self._fired:
			listener()
			return
		self._listeners.append(listener)

	def fire(self) -> bool:
		"""Fire the event; returns False when it had already fired."""
		if self._fired:
			return False
		self._fired = True
		listeners, self._listeners = self._listeners, []
		for listener in listeners:
			listener()
		return True

	def __repr__(self) -> str:
		return f"OneShotEvent({self.name!r}, fired={self._fired})"
