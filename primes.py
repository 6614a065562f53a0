from __future__ import annotations
from math import isqrt

class PrimeGenerator:
	"""Yields primes in increasing order, starting again from 2 after reset()."""
	__slots__ = ("_candidate",)
	def __init__(self) -> None:
		self._candidate = 1
	def next(self) -> int:
		while True:
			self._candidate += 1
			if self._is_prime(self._candidate):
				return self._candidate
	def reset(self) -> None:
		self._candidate = 1
	def __iter__(self) -> PrimeGenerator:
		return self
	def __next__(self) -> int:
		return self.next()
	@staticmethod
	def _is_prime(candidate: int) -> bool:
		# trial division; a divisor below the candidate exists iff one exists up to its root
		for divisor in range(2, isqrt(candidate) + 1):
			if candidate % divisor == 0:
				return False
		return True
