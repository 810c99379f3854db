import pytest

from scheduler import CallRequest, MergeAggregator, SingleCallAggregator, Stop, get_aggregator


def plan_stops(calls):
    return MergeAggregator().plan([CallRequest(o, d) for o, d in calls]).stops


def test_single_origin_single_destination():
    assert plan_stops([(0, 2)]) == [Stop(0, 2)]


def test_single_origin_many_destinations_ascend():
    assert plan_stops([(0, 3), (0, 1)]) == [Stop(0, 1), Stop(1, 3)]


def test_origin_between_destinations_still_ascends():
    assert plan_stops([(1, 3), (1, 0)]) == [Stop(1, 0), Stop(0, 3)]


def test_many_origins_single_destination():
    assert plan_stops([(1, 0), (3, 0)]) == [Stop(1, 3), Stop(3, 0)]


def test_many_origins_many_destinations_sweep_up_then_down():
    assert plan_stops([(2, 0), (1, 3)]) == [Stop(1, 2), Stop(2, 3), Stop(3, 0)]


def test_many_to_many_skips_stationary_leg():
    assert plan_stops([(1, 2), (2, 0)]) == [Stop(1, 2), Stop(2, 0)]


def test_duplicate_calls_collapse_but_are_all_consumed():
    calls = [CallRequest(0, 2), CallRequest(0, 2)]
    plan = MergeAggregator().plan(calls)
    assert plan.stops == [Stop(0, 2)]
    assert plan.consumed == calls


def test_empty_queue_gives_empty_plan():
    plan = MergeAggregator().plan([])
    assert not plan
    assert plan.consumed == []


def test_single_call_policy_takes_oldest_call_only():
    calls = [CallRequest(0, 2), CallRequest(1, 3)]
    plan = SingleCallAggregator().plan(calls)
    assert plan.stops == [Stop(0, 2)]
    assert plan.consumed == [CallRequest(0, 2)]
    assert not SingleCallAggregator().plan([])


def test_registry_lookup():
    assert isinstance(get_aggregator("MERGE"), MergeAggregator)
    assert isinstance(get_aggregator("single_call"), SingleCallAggregator)
    with pytest.raises(ValueError, match="Unknown dispatch policy"):
        get_aggregator("scan")
