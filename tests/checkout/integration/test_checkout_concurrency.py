"""A slow payment provider must not serialise unrelated requests."""

import asyncio
import time

import httpx
from marketplace.payments.gateway.fake_adapter import FakeGateway
from marketplace.web import create_app

PROVIDER_DELAY = 0.4


class SlowGateway(FakeGateway):
    def retrieve_checkout_session(self, session_id):
        time.sleep(PROVIDER_DELAY)
        return super().retrieve_checkout_session(session_id)


async def _callbacks(app, prefix, session_ids):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await asyncio.gather(
            *(client.get(f"{prefix}/success", params={"session_id": sid}) for sid in session_ids)
        )


def test_success_callbacks_overlap_while_the_provider_is_slow(settings, mailer):
    gateway = SlowGateway()
    app = create_app(settings, gateway=gateway, mailer=mailer)
    # No order reference: each callback is rejected right after the provider answers
    session_ids = [gateway.add_session(metadata={}).session_id for _ in range(4)]

    started = time.perf_counter()
    responses = asyncio.run(_callbacks(app, settings.api_prefix, session_ids))
    elapsed = time.perf_counter() - started

    assert [r.status_code for r in responses] == [400, 400, 400, 400]
    assert len(gateway.calls_to("retrieve_checkout_session")) == 4
    assert elapsed < PROVIDER_DELAY * 3


def test_health_answers_while_a_provider_call_is_in_flight(settings, mailer):
    gateway = SlowGateway()
    app = create_app(settings, gateway=gateway, mailer=mailer)
    session_id = gateway.add_session(metadata={}).session_id

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            callback = asyncio.create_task(
                client.get(f"{settings.api_prefix}/success", params={"session_id": session_id})
            )
            await asyncio.sleep(0.05)
            started = time.perf_counter()
            health = await client.get("/health")
            health_elapsed = time.perf_counter() - started
            return await callback, health, health_elapsed

    callback, health, health_elapsed = asyncio.run(scenario())

    assert health.status_code == 200
    assert health_elapsed < PROVIDER_DELAY / 2
    assert callback.status_code == 400
