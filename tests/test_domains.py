import httpx
import pytest

from naming.domains import DomainChecker, is_available, normalize_domain
from naming.exceptions import UpstreamNetworkError, ValidationError


def resolver(answers: dict[str, dict]) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        assert request.url.params["type"] == "A"
        if name not in answers:
            raise httpx.ConnectError("resolver unreachable", request=request)
        return httpx.Response(200, json=answers[name])

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    "given,expected",
    (
        ("openai", "openai.com"),
        ("  OpenAI ", "openai.com"),
        ("Aura Pay", "aurapay.com"),
        ("lumen.io", "lumen.io"),
        ("Lumen.IO", "lumen.io"),
    ),
)
def test_normalize_domain(given: str, expected: str) -> None:
    assert normalize_domain(given) == expected


@pytest.mark.parametrize("name", ("openai", "Aura Pay", "lumen.io", "x.co.uk"))
def test_normalize_domain_is_idempotent(name: str) -> None:
    once = normalize_domain(name)
    assert normalize_domain(once) == once


def test_normalize_domain_requires_a_name() -> None:
    with pytest.raises(ValidationError):
        normalize_domain("   ")


def test_is_available() -> None:
    assert is_available(3, has_answer=False)
    assert is_available(3, has_answer=True)
    assert is_available(0, has_answer=False)
    assert not is_available(0, has_answer=True)


@pytest.mark.asyncio
async def test_lookup_nxdomain_is_available() -> None:
    checker = DomainChecker(http_client=resolver({"openai.com": {"Status": 3}}))
    got = await checker.lookup("openai")
    assert got.to_dict() == {"domain": "openai.com", "available": True, "status": 3}


@pytest.mark.asyncio
async def test_lookup_with_answer_is_taken() -> None:
    answers = {
        "stripe.com": {
            "Status": 0,
            "Answer": [{"name": "stripe.com.", "type": 1, "data": "1.2.3.4"}],
        }
    }
    checker = DomainChecker(http_client=resolver(answers))
    got = await checker.lookup("Stripe")
    assert got.available is False
    assert got.status == 0


@pytest.mark.asyncio
async def test_lookup_without_answer_is_available() -> None:
    checker = DomainChecker(http_client=resolver({"velaro.com": {"Status": 0}}))
    got = await checker.lookup("velaro")
    assert got.available is True


@pytest.mark.asyncio
async def test_lookup_raises_on_network_failure() -> None:
    checker = DomainChecker(http_client=resolver({}))
    with pytest.raises(UpstreamNetworkError):
        await checker.lookup("openai")


@pytest.mark.asyncio
async def test_lookup_raises_on_bad_status() -> None:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(502, text="nope"))
    )
    checker = DomainChecker(http_client=client)
    with pytest.raises(UpstreamNetworkError):
        await checker.lookup("openai")


@pytest.mark.asyncio
async def test_check_degrades_to_unknown() -> None:
    checker = DomainChecker(http_client=resolver({}))
    got = await checker.check("Aura")
    assert got.domain == "aura.com"
    assert got.available is None
    assert got.unknown


@pytest.mark.asyncio
async def test_check_many_isolates_failures_and_keeps_order() -> None:
    answers = {
        "lumen.com": {"Status": 3},
        "stripe.com": {"Status": 0, "Answer": [{"data": "1.2.3.4"}]},
    }
    checker = DomainChecker(http_client=resolver(answers))
    got = await checker.check_many(["Lumen", "Broken", "Stripe"])
    assert [v.domain for v in got] == ["lumen.com", "broken.com", "stripe.com"]
    assert [v.available for v in got] == [True, None, False]
