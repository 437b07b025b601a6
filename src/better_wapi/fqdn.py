"""Split a challenge FQDN into registrable domain and record subdomain."""

import re

from better_wapi.exceptions import InvalidFqdnError

# Last two labels before the trailing dot
_DOMAIN_PATTERN = re.compile(r"\.([^.]+\.[^.]+)\.$")


def extract_domain(fqdn: str) -> str:
    """Return the registrable domain of a canonical FQDN.

    The registrable domain is the last two labels, e.g.
    "_acme-challenge.sub.example.com." -> "example.com".

    Args:
        fqdn: FQDN in trailing-dot form.

    Returns:
        The domain without trailing dot, or "" if the FQDN has fewer
        than three labels or no trailing dot.
    """
    match = _DOMAIN_PATTERN.search(fqdn)
    if match:
        return match.group(1)
    return ""


def extract_subdomain(fqdn: str, domain: str) -> str:
    """Return the part of fqdn in front of ".<domain>.".

    Args:
        fqdn: FQDN in trailing-dot form.
        domain: Registrable domain as returned by extract_domain().

    Returns:
        The subdomain, or fqdn unchanged when it does not end with
        ".<domain>.".
    """
    suffix = f".{domain}."
    if fqdn.endswith(suffix):
        return fqdn[: -len(suffix)]
    return fqdn


def split_fqdn(fqdn: str) -> tuple[str, str]:
    """Split a challenge FQDN, rejecting input that cannot be split.

    Args:
        fqdn: FQDN in trailing-dot form with at least three labels.

    Returns:
        Tuple of (domain, subdomain).

    Raises:
        InvalidFqdnError: If no domain can be derived or the subdomain
            would be empty.
    """
    domain = extract_domain(fqdn)
    if not domain:
        raise InvalidFqdnError(f"cannot derive domain from {fqdn!r}")

    subdomain = extract_subdomain(fqdn, domain)
    if subdomain == fqdn or not subdomain:
        raise InvalidFqdnError(f"cannot derive subdomain of {domain!r} from {fqdn!r}")

    return domain, subdomain
