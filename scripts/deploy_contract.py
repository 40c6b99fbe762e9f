"""
Smart Contract Deployment Script
Deploys the SpaceVerse contract and saves its address and ABI to the
Flutter app's assets

Requires the project to be installed (pip install -e .); equivalent to
`deploy-contract` or `python -m deployer.runner`.
"""

from deployer.runner import cli


if __name__ == "__main__":
    cli()
