"""Display strings and tables for calculation results"""

import pandas as pd

from .units import Scale


def fmt(value, decimals=2):
    return f"{value:,.{decimals}f}"


def format_summary(result):
    """Fixed-precision display strings for the headline figures"""
    d = result.derived
    annual_wan = d.annual_output.to(Scale.TEN_THOUSAND_TONNES)
    return {
        "daily_furnace_cycles": fmt(d.daily_furnace_cycles, 2),
        "daily_output": f"{fmt(d.daily_output.tonnes, 2)} t",
        "annual_output": f"{fmt(d.annual_output.tonnes, 2)} t",
        "annual_output_wan": f"{annual_wan.value:.4f} {annual_wan.scale.suffix}",
        "annual_charge_demand": f"{fmt(d.annual_charge_demand.tonnes, 2)} t",
        "iron_ratio": f"{d.iron_ratio:.4f} t/t",
        "scrap_amount_ratio": f"{d.scrap_amount_ratio:.4f} t/t",
        "total_emissions": f"{fmt(result.total_emissions, 2)} t CO₂",
        "avoided_emissions": f"{fmt(result.avoided_emissions, 2)} t CO₂",
        "net_emissions": f"{fmt(result.net_emissions, 2)} t CO₂",
        "intensity_kg": f"{result.emission_intensity_per_ton * 1000:.2f} kg CO₂/t",
        "intensity_t": f"{result.emission_intensity_per_ton:.4f} t CO₂/t",
        "net_intensity_kg": f"{result.net_intensity_per_ton * 1000:.2f} kg CO₂/t",
    }


def emissions_table(result):
    """Full ranked breakdown, one row per material"""
    total = result.total_emissions
    rows = [
        {
            "Material": e.label,
            "Annual amount": e.amount,
            "Unit": e.unit,
            "Emissions (t CO₂)": e.emission,
            "Per tonne (kg CO₂/t)": e.per_ton,
            "Share (%)": e.emission / total * 100 if total > 0 else 0.0,
        }
        for e in result.ranked()
    ]
    columns = ["Material", "Annual amount", "Unit", "Emissions (t CO₂)", "Per tonne (kg CO₂/t)", "Share (%)"]
    return pd.DataFrame(rows, columns=columns)


def display_table(result):
    """emissions_table with values rendered as strings for st.dataframe"""
    df = emissions_table(result)
    df["Annual amount"] = [fmt(v, 2) for v in df["Annual amount"]]
    df["Emissions (t CO₂)"] = [fmt(v, 3) for v in df["Emissions (t CO₂)"]]
    df["Per tonne (kg CO₂/t)"] = [fmt(v, 3) for v in df["Per tonne (kg CO₂/t)"]]
    df["Share (%)"] = [f"{v:.1f}" for v in df["Share (%)"]]
    return df


def credits_table(result):
    return pd.DataFrame(
        [{"Material": c.label, "Annual amount": fmt(c.amount, 2), "Unit": c.unit, "Avoided (t CO₂)": fmt(c.avoided, 3)}
         for c in result.credits],
        columns=["Material", "Annual amount", "Unit", "Avoided (t CO₂)"],
    )


def warnings_table(result):
    return pd.DataFrame(
        [{"Kind": w.kind.value, "Field": w.field or "", "Material": w.material or "", "Message": w.message}
         for w in result.warnings],
        columns=["Kind", "Field", "Material", "Message"],
    )


def emissions_csv(result):
    return emissions_table(result).to_csv(index=False).encode("utf-8")
