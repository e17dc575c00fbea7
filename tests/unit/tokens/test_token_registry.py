from factories import GNO, MARKET, NO_GNO, NO_SDAI, SDAI, UNKNOWN_TOKEN, YES_GNO, YES_SDAI, market_payload
from futarchy.domain.enums import TokenCategory, TokenSide
from futarchy.domain.models.market import MarketMetadata
from futarchy.tokens.registry import RegistryHolder, TokenRegistry, load_registry_holder


class TestBuild:
    def test_conditional_roles(self, registry):
        role = registry.classify(YES_GNO)
        assert role.category == TokenCategory.COMPANY
        assert role.side == TokenSide.YES
        assert role.symbol == "YES_GNO"
        assert role.is_conditional

        assert registry.classify(NO_SDAI).category == TokenCategory.CURRENCY
        assert registry.classify(NO_SDAI).side == TokenSide.NO

    def test_base_roles_record_their_leg(self, registry):
        gno = registry.classify(GNO)
        assert gno.category == TokenCategory.BASE
        assert gno.leg == TokenCategory.COMPANY
        assert gno.is_base
        assert not gno.is_conditional
        assert registry.classify(SDAI).leg == TokenCategory.CURRENCY

    def test_collateral_lookup(self, registry):
        assert registry.collateral_for(TokenCategory.COMPANY).address == GNO
        assert registry.collateral_for(TokenCategory.CURRENCY).symbol == "sDAI"

    def test_lookup_is_case_insensitive(self):
        mixed = "0xAbCdEf0000000000000000000000000000000001"
        metadata = MarketMetadata.model_validate({"companyTokens": {"yes": {"address": mixed, "symbol": "YES_GNO"}}})
        registry = TokenRegistry.build(metadata)
        assert registry.classify(mixed.lower()).address == mixed.lower()
        assert mixed.upper().replace("0X", "0x") in registry

    def test_unknown_and_empty(self, registry):
        assert registry.classify(UNKNOWN_TOKEN) is None
        assert registry.classify(None) is None
        assert registry.classify("") is None

    def test_counts_and_market(self, registry):
        assert len(registry) == 6
        assert registry.market_id == MARKET

    def test_partial_metadata(self):
        metadata = MarketMetadata.model_validate({
            "marketId": MARKET,
            "companyTokens": {"yes": {"address": YES_GNO, "symbol": "YES_GNO"}},
        })
        registry = TokenRegistry.build(metadata)
        assert len(registry) == 1
        assert registry.collateral_for(TokenCategory.COMPANY) is None

    def test_duplicate_address_keeps_first(self):
        payload = market_payload()
        payload["currencyTokens"]["yes"]["wrappedCollateralTokenAddress"] = YES_GNO
        registry = TokenRegistry.build(MarketMetadata.model_validate(payload))
        assert registry.classify(YES_GNO).category == TokenCategory.COMPANY
        assert len(registry) == 5

    def test_empty_registry(self):
        registry = TokenRegistry()
        assert len(registry) == 0
        assert registry.classify(YES_GNO) is None
        assert registry.roles() == []


class TestRegistryHolder:
    def test_starts_empty_without_metadata(self):
        holder = RegistryHolder()
        assert len(holder.current) == 0
        assert holder.metadata is None

    def test_rebuild_swaps_snapshot(self, registry_holder):
        old = registry_holder.current
        payload = market_payload()
        payload["marketId"] = "0xnew"
        del payload["currencyTokens"]

        new = registry_holder.rebuild(MarketMetadata.model_validate(payload))

        assert registry_holder.current is new
        assert new.market_id == "0xnew"
        assert new.classify(YES_SDAI) is None
        # Old snapshot untouched
        assert old.classify(YES_SDAI) is not None
        assert old.market_id == MARKET

    def test_load_from_file(self, tmp_path):
        import json

        path = tmp_path / "market.json"
        path.write_text(json.dumps(market_payload()))
        holder = load_registry_holder(str(path))
        assert len(holder.current) == 6
        assert holder.metadata.market_id == MARKET

    def test_load_without_path(self):
        assert len(load_registry_holder("").current) == 0

    def test_no_gno_not_collateral(self, registry):
        assert registry.collateral_for(TokenCategory.BASE) is None
        assert registry.classify(NO_GNO).leg is None
