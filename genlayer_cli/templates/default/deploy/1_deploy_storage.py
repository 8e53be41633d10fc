"""
Deploy the Storage contract. Run with ``genlayer deploy``.
"""

from pathlib import Path

from genlayer_py.types import TransactionStatus

CONTRACT_PATH = Path(__file__).resolve().parent.parent / "contracts" / "storage.py"


def main(client):
    tx_hash = client.deploy_contract(
        code=CONTRACT_PATH.read_text(encoding="utf-8"),
        args=["Initial storage"],
    )
    receipt = client.wait_for_transaction_receipt(
        transaction_hash=tx_hash,
        status=TransactionStatus.ACCEPTED,
    )
    print(f"Storage deployed: {receipt}")
