import numpy as np
import pandas as pd

import report_pipeline
from report_pipeline import main, run_report_pipeline

CONTINENTS = {
    "AFRICA (15)": [f"Africa-{i}" for i in range(15)],
    "EUROPE (15)": [f"Europe-{i}" for i in range(15)],
    "S. AMERICA (15)": [f"South-America-{i}" for i in range(15)],
}


def _membership_tokens():
    tokens = []
    for marker, countries in CONTINENTS.items():
        tokens.append(marker)
        tokens.extend(countries)
    return tokens


def _write_indicators(path):
    rng = np.random.default_rng(2024)
    countries = [c for names in CONTINENTS.values() for c in names] + ["Aruba", "World"]
    n = len(countries)
    rural_pct = rng.uniform(10, 90, size=n)
    gni = np.exp(10 - 0.03 * rural_pct + rng.normal(0, 0.3, size=n))
    imports = rng.uniform(15, 80, size=n)
    df = pd.DataFrame(
        {
            "country": countries,
            "gni_per_capita": gni,
            "imports_pct_gdp": imports,
            "exports_pct_gdp": imports * rng.uniform(0.7, 1.2, size=n),
            "fertility_rate_start": rng.uniform(1.5, 7, size=n),
            "fertility_rate_end": rng.uniform(1.2, 6, size=n),
            "infant_mortality_rate": rng.uniform(2, 90, size=n),
            "rural_pop_pct": rural_pct,
        }
    )
    df.loc[n - 1, "gni_per_capita"] = 0.0  # aggregate row, resolves to Other
    df.to_csv(path, index=False)


def test_report_runs_end_to_end(tmp_path, capsys):
    csv_path = tmp_path / "indicators.csv"
    _write_indicators(csv_path)
    output_dir = tmp_path / "report"

    artefacts = run_report_pipeline(
        indicators_path=csv_path,
        membership_tokens=_membership_tokens(),
        output_dir=output_dir,
        seed=1,
        n_iterations=200,
    )

    assert set(artefacts) == {"ttest", "bootstrap", "correlation", "permutation"}
    for paths in artefacts.values():
        for path in paths:
            assert path.exists()
            assert path.parent == output_dir

    out = capsys.readouterr().out
    assert "45 countries kept" in out
    assert "Welch two-sample t-test" in out
    assert "Backward elimination" in out
    assert "Report completed successfully." in out


def test_cli_forwards_selector_and_column_renames(tmp_path, monkeypatch):
    renames_path = tmp_path / "renames.csv"
    renames_path.write_text("source,target\nNation,country\n", encoding="utf-8")
    calls = []
    monkeypatch.setattr(report_pipeline, "run_report_pipeline", lambda **kwargs: calls.append(kwargs) or {})

    main(
        [
            "--indicators-csv",
            str(tmp_path / "indicators.csv"),
            "--continents-selector",
            "h3, p",
            "--column-renames",
            str(renames_path),
        ]
    )

    (kwargs,) = calls
    assert kwargs["continents_selector"] == "h3, p"
    assert kwargs["column_renames"] == {"Nation": "country"}
    assert kwargs["indicators_path"] == tmp_path / "indicators.csv"


def test_cli_defaults_to_configured_selector(monkeypatch):
    calls = []
    monkeypatch.setattr(report_pipeline, "run_report_pipeline", lambda **kwargs: calls.append(kwargs) or {})

    main([])

    assert calls[0]["continents_selector"] == report_pipeline.CONTINENTS_SELECTOR
    assert calls[0]["column_renames"] is None
