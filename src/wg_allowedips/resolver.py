"""Hostname resolution backends.

Brief:
  The pipeline only depends on the Resolver interface: one resolve() call
  that returns zero or more literal IPv4 addresses or raises
  ResolutionError. Two implementations are provided:

    - DigResolver runs ``dig +short <hostname>`` and keeps the answer lines
      that are IPv4 addresses (CNAME targets and other records are dropped).
    - DnsPythonResolver asks the dnspython stub resolver for A records.

  Neither backend retries, caches, or applies a configurable timeout.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

import dns.exception
import dns.resolver

from .config.config_schema import ResolverConfig
from .entries import is_valid_ipv4
from .errors import ResolutionError

logger = logging.getLogger(__name__)


class Resolver:
    """Base class for hostname -> IPv4 address resolution."""

    name = "base"

    def resolve(self, hostname: str) -> List[str]:
        """Brief: Resolve hostname to literal IPv4 addresses.

        Inputs:
          - hostname: A name that passed hostname validation.

        Outputs:
          - list[str]: Zero or more dotted-quad addresses (order irrelevant).

        Raises:
          - ResolutionError: the lookup itself failed.
        """
        raise NotImplementedError


def parse_short_answers(output: str) -> List[str]:
    """Brief: Extract IPv4 addresses from ``+short`` style resolver output.

    Inputs:
      - output: Text with one answer per line, possibly mixed record types.

    Outputs:
      - list[str]: Lines that are valid literal IPv4 addresses, in order.

    Example:
      >>> parse_short_answers("edge.example.net.\\n93.184.216.34\\n")
      ['93.184.216.34']
    """

    addresses: List[str] = []
    for raw in output.splitlines():
        line = raw.strip()
        if line and is_valid_ipv4(line):
            addresses.append(line)
    return addresses


class DigResolver(Resolver):
    """Brief: Resolve names by running ``<command> +short <hostname>``.

    Inputs:
      - command: Executable to run (default: "dig").
    """

    name = "dig"

    def __init__(self, command: str = "dig") -> None:
        self.command = command

    def resolve(self, hostname: str) -> List[str]:
        argv = [self.command, "+short", hostname]
        logger.debug("running %s", " ".join(argv))
        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except FileNotFoundError as exc:
            raise ResolutionError(hostname, f"{self.command} not found on PATH") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            cause = f"{self.command} exited with status {exc.returncode}"
            if detail:
                cause = f"{cause}: {detail}"
            raise ResolutionError(hostname, cause) from exc
        except OSError as exc:
            raise ResolutionError(hostname, str(exc)) from exc
        return parse_short_answers(proc.stdout or "")


class DnsPythonResolver(Resolver):
    """Brief: Resolve A records in-process with dnspython.

    Inputs:
      - nameservers: Optional nameserver addresses; when empty the system
        resolver configuration (/etc/resolv.conf) is used.

    Notes:
      - NXDOMAIN and empty answers return [] so they surface as "no results"
        warnings, the same way ``dig +short`` prints nothing for them.
    """

    name = "dnspython"

    def __init__(self, nameservers: Optional[Sequence[str]] = None) -> None:
        self.nameservers = list(nameservers or [])
        self._resolver: Optional[dns.resolver.Resolver] = None

    def _get_resolver(self) -> dns.resolver.Resolver:
        if self._resolver is None:
            r = dns.resolver.Resolver(configure=not self.nameservers)
            if self.nameservers:
                r.nameservers = list(self.nameservers)
            self._resolver = r
        return self._resolver

    def resolve(self, hostname: str) -> List[str]:
        try:
            answer = self._get_resolver().resolve(
                hostname, "A", raise_on_no_answer=False
            )
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return []
        except dns.exception.DNSException as exc:
            raise ResolutionError(hostname, str(exc) or exc.__class__.__name__) from exc
        if answer.rrset is None:
            return []
        return [str(rdata.address) for rdata in answer if is_valid_ipv4(str(rdata.address))]


def build_resolver(config: Optional[ResolverConfig] = None) -> Resolver:
    """Brief: Construct the resolver selected by configuration.

    Inputs:
      - config: ResolverConfig (defaults to the dig backend).

    Outputs:
      - Resolver instance.
    """

    cfg = config or ResolverConfig()
    if cfg.backend == "dnspython":
        return DnsPythonResolver(nameservers=cfg.nameservers)
    return DigResolver(command=cfg.command)
