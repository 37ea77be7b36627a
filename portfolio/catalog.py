from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

@dataclass(frozen=True)
class Asset:
    asset_id: str  # price API identifier
    name: str
    symbol: str

# Supported assets, keyed by price API identifier
ASSET_CATALOG: Dict[str, Asset] = {
    a.asset_id: a
    for a in [
        Asset("bitcoin", "Bitcoin", "BTC"),
        Asset("ethereum", "Ethereum", "ETH"),
        Asset("binancecoin", "Binance Coin", "BNB"),
        Asset("cardano", "Cardano", "ADA"),
        Asset("solana", "Solana", "SOL"),
        Asset("ripple", "Ripple", "XRP"),
        Asset("polkadot", "Polkadot", "DOT"),
        Asset("dogecoin", "Dogecoin", "DOGE"),
        Asset("avalanche-2", "Avalanche", "AVAX"),
        Asset("chainlink", "Chainlink", "LINK"),
        Asset("polygon", "Polygon", "MATIC"),
        Asset("litecoin", "Litecoin", "LTC"),
        Asset("uniswap", "Uniswap", "UNI"),
        Asset("cosmos", "Cosmos", "ATOM"),
        Asset("algorand", "Algorand", "ALGO"),
    ]
}

def asset_ids() -> List[str]:
    return list(ASSET_CATALOG)

def get_asset(asset_id: str) -> Optional[Asset]:
    return ASSET_CATALOG.get(asset_id)
