from __future__ import annotations

from card_issuers.core.catalog import IssuerCatalog
from card_issuers.core.models import CompareQuery
from card_issuers.core.scoring import compare_issuers, default_matches, run_comparison, score_issuer


def _by_id(results):
    return {r.issuer.id: r for r in results}


def test_country_is_a_hard_gate(catalog) -> None:
    results = compare_issuers(catalog, CompareQuery(country="US", network="mastercard", stablecoin="DAI"))
    assert [r.issuer.id for r in results] == ["alpha", "beta"]

    assert compare_issuers(catalog, CompareQuery(country="FR")) == []


def test_country_only_scores_base_plus_quality(catalog) -> None:
    results = _by_id(compare_issuers(catalog, CompareQuery(country="us")))
    assert results["alpha"].score == 20 + 2 * 4 + 2 * 4
    assert results["beta"].score == 20 + 2 * 2 + 2 * 5
    assert results["alpha"].missing == []
    assert [reason.type for reason in results["alpha"].reasons] == ["country", "api_maturity", "docs_quality"]


def test_worked_example(make_issuer) -> None:
    issuer = make_issuer(
        id="x",
        regions_supported=[{"code": "US"}],
        networks=["visa"],
        custody_model="custodial",
        api_maturity=4,
        docs_quality=3,
    )
    [result] = compare_issuers([issuer], CompareQuery(country="us", network="visa"))
    assert result.score == 44
    assert [(r.type, r.score) for r in result.reasons] == [
        ("country", 20),
        ("network", 10),
        ("api_maturity", 8),
        ("docs_quality", 6),
    ]
    assert result.reasons[0].message == "Supports country: us"


def test_mismatches_are_reported_without_penalty(catalog) -> None:
    base = _by_id(compare_issuers(catalog, CompareQuery(country="US")))
    query = CompareQuery(
        country="US",
        network="visa",
        stablecoin="USDT",
        chain="Base",
        custody_model="hybrid",
        card_type="credit",
        customer_type="b2b",
        kyc="required",
    )
    results = _by_id(compare_issuers(catalog, query))

    assert results["alpha"].score == base["alpha"].score + 70
    assert results["alpha"].missing == []

    beta = results["beta"]
    # only the chain matches, through the agnostic sentinel
    assert beta.score == base["beta"].score + 10
    assert beta.missing == [
        "Does not support network: visa",
        "Does not support stablecoin: USDT",
        "Custody model mismatch: non_custodial vs hybrid",
        "Does not support card type: credit",
        "Does not support customer type: b2b",
        "KYC requirement mismatch: optional vs required",
    ]


def test_each_satisfied_criterion_never_lowers_the_score(make_issuer) -> None:
    issuer = make_issuer(regions_supported=[{"code": "DE"}], networks=["visa"], stablecoins=["USDC"])
    fields = [("network", "visa"), ("stablecoin", "USDC"), ("card_type", "debit"), ("custody_model", "custodial")]
    previous = score_issuer(issuer, CompareQuery(country="DE")).score
    applied = {}
    for name, value in fields:
        applied[name] = value
        score = score_issuer(issuer, CompareQuery(country="DE", **applied)).score
        assert score == previous + 10
        previous = score


def test_kyc_rule_is_asymmetric(make_issuer) -> None:
    required = make_issuer(id="req", kyc_kyb="required")
    optional = make_issuer(id="opt", kyc_kyb="optional")
    refusing = make_issuer(id="none", kyc_kyb="not_supported")

    def kyc_reasons(issuer, wanted):
        result = score_issuer(issuer, CompareQuery(country="US", kyc=wanted))
        return [r.type for r in result.reasons if r.type == "kyc"]

    assert kyc_reasons(required, "optional") == ["kyc"]
    assert kyc_reasons(optional, "optional") == ["kyc"]
    assert kyc_reasons(refusing, "optional") == []
    assert kyc_reasons(required, "required") == ["kyc"]
    assert kyc_reasons(optional, "required") == []
    assert score_issuer(optional, CompareQuery(country="US", kyc="required")).missing == [
        "KYC requirement mismatch: optional vs required"
    ]


def test_agnostic_chain_matches_any_requested_chain(make_issuer) -> None:
    issuer = make_issuer(chains=["agnostic"])
    for chain in ("Ethereum", "Cronos", "SomethingNew"):
        result = score_issuer(issuer, CompareQuery(country="US", chain=chain))
        assert "chain" in [r.type for r in result.reasons]
        assert result.missing == []


def test_customer_type_both_matches_either(make_issuer) -> None:
    issuer = make_issuer(customer_type=["both"])
    for wanted in ("b2b", "b2c"):
        result = score_issuer(issuer, CompareQuery(country="US", customer_type=wanted))
        assert result.reasons[1].type == "customer_type"


def test_results_sorted_descending_with_ties_in_catalog_order(make_issuer) -> None:
    issuers = [
        make_issuer(id="low", api_maturity=1, docs_quality=1),
        make_issuer(id="tie-a", api_maturity=3, docs_quality=3),
        make_issuer(id="high", api_maturity=5, docs_quality=5),
        make_issuer(id="tie-b", api_maturity=2, docs_quality=4),
    ]
    results = compare_issuers(issuers, CompareQuery(country="US"))
    assert [r.issuer.id for r in results] == ["high", "tie-a", "tie-b", "low"]
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_unknown_query_values_only_produce_missing_entries(catalog) -> None:
    results = compare_issuers(catalog, CompareQuery(country="US", network="amex", kyc="sometimes"))
    for result in results:
        assert len(result.missing) == 2
        assert [r.type for r in result.reasons] == ["country", "api_maturity", "docs_quality"]


def test_default_matches_use_flat_score_in_catalog_order(catalog) -> None:
    matches = default_matches(catalog)
    assert [m.issuer.id for m in matches] == ["alpha", "beta", "gamma"]
    assert all(m.score == 50 and m.reasons == [] and m.missing == [] for m in matches)


def test_run_comparison_falls_back_without_country(catalog) -> None:
    response = run_comparison(catalog, CompareQuery(network="visa"))
    assert [m.score for m in response.matches] == [50, 50, 50]
    assert response.query.network == "visa"

    scored = run_comparison(catalog, CompareQuery(country="SG"))
    assert [m.issuer.id for m in scored.matches] == ["gamma"]
    assert scored.matches[0].score == 40


def test_empty_catalog_yields_no_matches() -> None:
    assert run_comparison(IssuerCatalog(), CompareQuery(country="US")).matches == []
    assert run_comparison(IssuerCatalog(), CompareQuery()).matches == []
