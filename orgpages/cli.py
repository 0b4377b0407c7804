#!/usr/bin/env python3

import click
import sys

from orgpages.config import configure_logging, load_config
from orgpages.exit_codes import CommandError
from orgpages.pipeline import build_site
from orgpages.render import render_summary


@click.command()
def cli():
    """orgpages - Static workshop listings for a GitHub organization.

    Lists the organization's repositories, reads each README for a title
    and blurb, groups repositories by topic and writes the complete
    (all.html) and featured (index.html) listing pages.

    \b
    Configuration comes from the environment:
        ORGPAGES_ORG        Organization to list (default: ubc-library-rc)
        GITHUB_TOKEN        Optional API token
        ORGPAGES_CONFIG     Optional JSON/TOML/YAML config file
    """
    try:
        config = load_config()
        configure_logging(config)
        result = build_site(config)
    except CommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    render_summary(result)


def main():
    cli()

if __name__ == "__main__":
    main()
