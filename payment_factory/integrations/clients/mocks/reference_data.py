"""
Seed data for the mock payments gateway.

Balances, corridor quotes, fee estimates and payment lifecycle events that the
demo shows when no live API key is configured. Values are strings so they turn
into exact Decimals.
"""

from typing import Any, Dict, List

WALLET_ID = "wallet-corp-001"

BALANCES: Dict[str, Any] = {
    "walletId": WALLET_ID,
    "totalUSDC": "1247500.00",
    "chains": [
        {"chain": "ETH", "chainName": "Ethereum", "balance": "850000.00", "percentage": 68.1,
         "avgGas": "2.40", "lastActivity": "2026-01-16T09:30:00Z", "color": "#627EEA"},
        {"chain": "MATIC", "chainName": "Polygon", "balance": "245000.00", "percentage": 19.6,
         "avgGas": "0.02", "lastActivity": "2026-01-16T10:15:00Z", "color": "#8247E5"},
        {"chain": "ARB", "chainName": "Arbitrum", "balance": "102500.00", "percentage": 8.2,
         "avgGas": "0.08", "lastActivity": "2026-01-15T14:22:00Z", "color": "#28A0F0"},
        {"chain": "BASE", "chainName": "Base", "balance": "35000.00", "percentage": 2.8,
         "avgGas": "0.05", "lastActivity": "2026-01-14T11:45:00Z", "color": "#0052FF"},
        {"chain": "SOL", "chainName": "Solana", "balance": "15000.00", "percentage": 1.2,
         "avgGas": "0.001", "lastActivity": "2026-01-13T16:00:00Z", "color": "#00FFA3"},
    ],
}

# Provider (BFI) quotes per corridor. totalReceived and expiresAt are recomputed per request.
QUOTES: Dict[str, List[Dict[str, Any]]] = {
    "US-MX": [
        {"quoteId": "q-bitso-001", "bfiName": "Bitso", "bfiLogo": "https://assets.bitso.com/logos/bitso-logo.svg",
         "rate": "17.85", "inverseRate": "0.0560", "fee": "25.00", "settlementMinutes": 15,
         "historicalComparison": {"vs24h": 0.5, "vs7d": -0.2}, "paymentMethod": "SPEI"},
        {"quoteId": "q-mercado-002", "bfiName": "Mercado Pago", "bfiLogo": None,
         "rate": "17.82", "inverseRate": "0.0561", "fee": "15.00", "settlementMinutes": 20,
         "historicalComparison": {"vs24h": 0.3, "vs7d": -0.4}, "paymentMethod": "SPEI"},
        {"quoteId": "q-ripio-003", "bfiName": "Ripio", "bfiLogo": None,
         "rate": "17.88", "inverseRate": "0.0559", "fee": "30.00", "settlementMinutes": 12,
         "historicalComparison": {"vs24h": 0.7, "vs7d": 0.1}, "paymentMethod": "SPEI"},
    ],
    "US-BR": [
        {"quoteId": "q-nubank-001", "bfiName": "Nubank", "bfiLogo": None,
         "rate": "5.92", "inverseRate": "0.169", "fee": "20.00", "settlementMinutes": 10,
         "historicalComparison": {"vs24h": -0.3, "vs7d": 0.8}, "paymentMethod": "PIX"},
        {"quoteId": "q-btgpactual-002", "bfiName": "BTG Pactual", "bfiLogo": None,
         "rate": "5.89", "inverseRate": "0.170", "fee": "35.00", "settlementMinutes": 15,
         "historicalComparison": {"vs24h": -0.5, "vs7d": 0.5}, "paymentMethod": "PIX"},
    ],
    "US-NG": [
        {"quoteId": "q-flutterwave-001", "bfiName": "Flutterwave", "bfiLogo": None,
         "rate": "1580.50", "inverseRate": "0.000633", "fee": "50.00", "settlementMinutes": 30,
         "historicalComparison": {"vs24h": 1.2, "vs7d": 2.5}, "paymentMethod": "BANK-TRANSFER"},
    ],
    "US-CO": [
        {"quoteId": "q-bold-001", "bfiName": "Bold", "bfiLogo": None,
         "rate": "4250.00", "inverseRate": "0.000235", "fee": "25.00", "settlementMinutes": 20,
         "historicalComparison": {"vs24h": 0.2, "vs7d": -0.8}, "paymentMethod": "BANK-TRANSFER"},
    ],
}

FEE_ESTIMATES: Dict[str, Dict[str, str]] = {
    "ETH": {"gas": "2.40", "time": "~2 min", "congestion": "normal"},
    "MATIC": {"gas": "0.02", "time": "~30 sec", "congestion": "low"},
    "ARB": {"gas": "0.08", "time": "~30 sec", "congestion": "low"},
    "BASE": {"gas": "0.05", "time": "~30 sec", "congestion": "low"},
    "SOL": {"gas": "0.001", "time": "~1 sec", "congestion": "low"},
}

PAYMENT_EVENTS: List[Dict[str, str]] = [
    {"timestamp": "10:42:15", "type": "payment.created",
     "description": "Payment accepted, pending BFI approval", "status": "completed"},
    {"timestamp": "10:42:18", "type": "payment.bfi_approved",
     "description": "Bitso approved, ready for crypto transfer", "status": "completed"},
    {"timestamp": "10:42:24", "type": "crypto.broadcast",
     "description": "Tx 0x8a3f...7d2e broadcast to Polygon", "status": "completed"},
    {"timestamp": "10:42:31", "type": "crypto.confirmed",
     "description": "Confirmed in block #52,847,102", "status": "completed"},
    {"timestamp": "10:43:45", "type": "fiat.initiated",
     "description": "SPEI transfer initiated", "status": "completed"},
    {"timestamp": "10:44:02", "type": "payment.completed",
     "description": "Beneficiary received 445,250.00 MXN", "status": "completed"},
]

# Supported currency pairs for the quote screen.
CURRENCY_PAIRS: List[Dict[str, str]] = [
    {"source": "USD", "destination": "MXN", "corridor": "US-MX"},
    {"source": "USD", "destination": "BRL", "corridor": "US-BR"},
    {"source": "USD", "destination": "COP", "corridor": "US-CO"},
    {"source": "USD", "destination": "NGN", "corridor": "US-NG"},
    {"source": "USD", "destination": "HKD", "corridor": "US-HK"},
    {"source": "USD", "destination": "CNY", "corridor": "US-CN"},
    {"source": "EUR", "destination": "MXN", "corridor": "EU-MX"},
    {"source": "GBP", "destination": "NGN", "corridor": "GB-NG"},
]
