"""Keep a pull request description linked to the Jira ticket named in its title."""

__version__ = "1.0.0"
