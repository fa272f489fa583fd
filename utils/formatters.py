from config.settings import DEFAULT_CURRENCY, SUPPORTED_CURRENCIES


def get_currency_config(currency: str = DEFAULT_CURRENCY) -> dict:
    """Unknown codes fall back to the default currency."""
    return SUPPORTED_CURRENCIES.get(currency, SUPPORTED_CURRENCIES[DEFAULT_CURRENCY])


def fmt_amount(value: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format money: 1234.5 -> '1,234.50 DH' (MAD) or '$1,234.50' (USD)"""
    cfg = get_currency_config(currency)
    number = f"{value:,.{cfg['decimals']}f}"
    if cfg["suffix"]:
        return f"{number} {cfg['symbol']}"
    if value < 0:
        return f"-{cfg['symbol']}{number[1:]}"
    return f"{cfg['symbol']}{number}"


def fmt_rate(value: float) -> str:
    """Annual rate in percent: 5.5 -> 5.50%"""
    return f"{value:.2f}%"


def fmt_percent(value: float) -> str:
    """Progress already in percent: 42.123 -> 42.1%"""
    return f"{value:.1f}%"


def fmt_months(months: int) -> str:
    """36 -> '3 years', 14 -> '1 year 2 months'"""
    years, remain = divmod(months, 12)
    parts = []
    if years:
        parts.append(f"{years} year" + ("s" if years != 1 else ""))
    if remain or not years:
        parts.append(f"{remain} month" + ("s" if remain != 1 else ""))
    return " ".join(parts)

