#!/usr/bin/env python3
"""
Quick script to check the redirect configuration and the rules currently served.
Run this to verify your configuration.

Usage:
    # With environment variables set:
    export REDIRECTS_API_URL=http://127.0.0.1:8090/redirects
    python check_redirects.py

    # Or check environment variables only:
    python check_redirects.py --env-only

    # Dry-run a request path against the current rules:
    python check_redirects.py --path '/old?a=1&b=2'
"""
import os
import sys
import argparse
import logging

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

ENV_VARS = [
    'REDIRECTS_API_URL',
    'REDIRECTS_FETCH_TIMEOUT',
    'REDIRECTS_CACHE_TTL',
    'REDIRECTS_API_PREFIXES',
    'LISTENER_PORT',
    'LOG_LEVEL',
]


def check_env_vars():
    """Check environment variables directly."""
    print("=" * 60)
    print("Environment Variables Check")
    print("=" * 60)
    print()

    for key in ENV_VARS:
        print(f"  {key}: {os.getenv(key, 'not set (default)')}")
    print()


def check_rules():
    """Load Config, fetch the rules and report what was decoded."""
    from config import Config
    from redirect_rule import parse_redirect_rules
    from rule_source import RuleSource
    from errors import RedirectError

    try:
        config = Config()
    except ValueError as e:
        print(f"Error loading configuration: {e}")
        return None

    print("=" * 60)
    print("Rule Source Status")
    print("=" * 60)
    print()
    print(f"Endpoint: {config.get_redirects_api_url()}")
    print(f"Timeout: {config.get_fetch_timeout()}s")
    print(f"Cache TTL: {config.get_cache_ttl()}ms")
    print(f"Skipped prefixes: {', '.join(config.get_api_prefixes()) or 'none'}")
    print()

    source = RuleSource.from_config(config)
    try:
        payload = source.fetch_payload()
        rules = parse_redirect_rules(payload)
    except RedirectError as e:
        print(f"✗ Could not load rules: {e}")
        print("  Every request will pass through unmodified.")
        return None

    dropped = len(payload) - len(rules)
    print(f"✓ {len(rules)} rule(s) loaded")
    if dropped:
        print(f"⚠️  WARNING: {dropped} rule(s) dropped as invalid (see log output above)")
    print()
    for rule in rules:
        print(f"  {rule}")
    print()
    return config, rules


def check_path(config, rules, path_and_query: str):
    """Print the decision the matcher would produce for a path."""
    from redirect_matcher import RedirectMatcher
    from request_descriptor import RequestDescriptor
    from request_gate import is_eligible

    path, sep, query = path_and_query.partition('?')
    descriptor = RequestDescriptor(path, sep + query if query else '')

    print("=" * 60)
    print(f"Dry run: {descriptor.full_href}")
    print("=" * 60)

    if not is_eligible(descriptor.path, config.get_api_prefixes()):
        print("✓ Not eligible for redirects (static file or API path), passes through")
        return

    decision = RedirectMatcher().evaluate(descriptor, rules)
    if decision is None:
        print("✓ No redirect, passes through")
    else:
        print(f"→ {decision.status_code} Location: {decision.target_url}")


def main():
    parser = argparse.ArgumentParser(description='Check redirect configuration and rules')
    parser.add_argument('--env-only', action='store_true',
                        help='Only check environment variables, do not fetch rules')
    parser.add_argument('--path', help='Request path (with optional query string) to dry-run')
    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s')

    check_env_vars()
    if args.env_only:
        return

    result = check_rules()
    if result is None:
        sys.exit(1)

    if args.path:
        config, rules = result
        check_path(config, rules, args.path)


if __name__ == '__main__':
    main()
