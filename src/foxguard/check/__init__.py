"""Foxtrot merge detection."""

from .ancestry import AncestryChainComputer
from .errors import CheckTimeoutError, VerificationError
from .models import AncestryChain, BaseSnapshot, ResolutionStrategy, ResolvedBase, Verdict, VerdictStatus
from .resolver import BaseResolver
from .verifier import ForwardMergeVerifier

__all__ = [
	"AncestryChain",
	"AncestryChainComputer",
	"BaseResolver",
	"BaseSnapshot",
	"CheckTimeoutError",
	"ForwardMergeVerifier",
	"ResolutionStrategy",
	"ResolvedBase",
	"VerificationError",
	"Verdict",
	"VerdictStatus",
]
