"""
Sign-in commands for the job search CLI.

Runs the browser side of the Google authorization-code + PKCE flow:
``auth url`` starts it, ``auth callback`` finishes it through the token
service, ``auth status`` and ``auth logout`` manage the stored session.
"""

import sys

import click

from src.client.api_client import APIConnectionError, APIError, JobSearchAPIClient
from src.oauth.pkce import build_authorization_url, generate_pkce_pair, generate_state, validate_callback

from .utils import get_cli_context, print_error, print_success, print_warning

PKCE_VERIFIER_KEY = "pkce_verifier"
OAUTH_STATE_KEY = "oauth_state"


def _clear_flow(storage) -> None:
    storage.remove(PKCE_VERIFIER_KEY)
    storage.remove(OAUTH_STATE_KEY)


@click.group("auth")
def auth() -> None:
    """Sign in with Google and manage the stored session."""
    pass


@auth.command("url")
@click.option("--client-id", envvar="GOOGLE_CLIENT_ID", required=True, help="OAuth client ID")
@click.option("--redirect-uri", required=True, help="Registered OAuth redirect URI")
@click.pass_context
def url(ctx: click.Context, client_id: str, redirect_uri: str) -> None:
    """
    Start sign-in: print the consent URL and remember the PKCE verifier.

    Example: jobsearch auth url --redirect-uri https://app.example.com/auth/callback
    """
    cli_ctx = get_cli_context(ctx)
    verifier, challenge = generate_pkce_pair()
    state = generate_state()

    cli_ctx.storage.set(PKCE_VERIFIER_KEY, verifier)
    cli_ctx.storage.set(OAUTH_STATE_KEY, state)

    click.echo("Open this URL to sign in:")
    click.echo(build_authorization_url(client_id, redirect_uri, challenge, state))


@auth.command("callback")
@click.option("--code", required=True, help="Authorization code from the callback URL")
@click.option("--state", required=True, help="State value from the callback URL")
@click.option("--redirect-uri", required=True, help="Redirect URI used with 'auth url'")
@click.pass_context
def callback(ctx: click.Context, code: str, state: str, redirect_uri: str) -> None:
    """
    Finish sign-in by exchanging the callback code for tokens.

    Example: jobsearch auth callback --code 4/0Ab... --state xyz --redirect-uri https://app.example.com/auth/callback
    """
    cli_ctx = get_cli_context(ctx)
    storage = cli_ctx.storage

    if not validate_callback(storage.get(OAUTH_STATE_KEY), state, code):
        _clear_flow(storage)
        print_error("State mismatch. Start again with 'jobsearch auth url'.")
        sys.exit(1)

    verifier = storage.get(PKCE_VERIFIER_KEY)
    if not verifier:
        print_error("No PKCE verifier stored. Start again with 'jobsearch auth url'.")
        sys.exit(1)

    client: JobSearchAPIClient = cli_ctx.api_client
    try:
        data = client.exchange_authorization_code(
            code,
            verifier,
            redirect_uri,
            exchange_url=cli_ctx.config.exchange_url,
        )
    except APIConnectionError as e:
        print_error(f"Token service unavailable: {e}")
        sys.exit(1)
    except APIError as e:
        print_error(f"Sign-in failed: {e.detail if e.detail is not None else e}")
        sys.exit(1)
    finally:
        _clear_flow(storage)

    print_success("Signed in")
    click.echo(f"Scopes: {', '.join(data.get('scope', [])) or 'none'}")
    if not data.get("refresh_token"):
        print_warning("No refresh token issued; you will need to sign in again when the token expires")


@auth.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether session tokens are stored."""
    session = get_cli_context(ctx).session
    if session.is_authenticated:
        click.echo("Signed in")
        click.echo(f"Refresh token: {'stored' if session.refresh_token else 'missing'}")
    else:
        click.echo("Not signed in")


@auth.command("logout")
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Clear stored session tokens."""
    get_cli_context(ctx).session.clear()
    print_success("Signed out")
