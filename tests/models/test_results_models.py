import json

from jvm_memory_calculator.api import calculate_memory
from jvm_memory_calculator.models.recommendation import ParameterRecommendation


def test_token_rendering():
    assert ParameterRecommendation("-XX:+UseG1GC", "", "").token == "-XX:+UseG1GC"
    assert (
        ParameterRecommendation("-XX:MaxGCPauseMillis", "200", "").token
        == "-XX:MaxGCPauseMillis=200"
    )
    assert ParameterRecommendation("-Xss", "1M", "", separator="").token == "-Xss1M"


def test_sizing_results_to_dict_is_json_serializable(g1_input):
    results = calculate_memory(g1_input)
    data = json.loads(json.dumps(results.to_dict()))

    assert data["profile_name"] == "java21"
    assert data["sizing_input"]["gc_strategy"] == "G1"
    assert data["breakdown"]["total_mb"] == 776
    assert data["breakdown"]["margin_policy"] == "alignment"
    assert data["breakdown"]["safety_margin_percent"] == 0.52
    assert data["parameters"][1]["token"] == "-Xmx384m"
    assert data["containers"]["memory_limit_mi"] == 776
    assert data["command_line"] == results.command_line
