"""Tests for the keyword task classifier."""

from unittest.mock import AsyncMock, Mock

import pytest

from recursive_agent.config.engine_config import EngineConfig
from recursive_agent.decomposition.base import TaskClassifier
from recursive_agent.decomposition.keyword_classifier import KeywordTaskClassifier


class TestKeywordTaskClassifier:
    """Test delegation to policy, splitter and executor."""

    def test_is_task_classifier(self):
        classifier = KeywordTaskClassifier()

        assert isinstance(classifier, TaskClassifier)
        assert classifier.name == "keyword"

    def test_from_config_uses_latency(self):
        config = EngineConfig(min_latency_seconds=0.1, max_latency_seconds=0.2)

        classifier = KeywordTaskClassifier.from_config(config)

        assert classifier.executor.min_latency == 0.1
        assert classifier.executor.max_latency == 0.2

    def test_delegates_should_split(self):
        policy = Mock()
        policy.should_decompose.return_value = True
        classifier = KeywordTaskClassifier(policy=policy)

        assert classifier.should_split("anything", 1, 3)
        policy.should_decompose.assert_called_once_with("anything", 1, 3)

    def test_delegates_split(self):
        splitter = Mock()
        splitter.decompose.return_value = ["a", "b"]
        classifier = KeywordTaskClassifier(splitter=splitter)

        assert classifier.split("task") == ["a", "b"]

    @pytest.mark.asyncio
    async def test_delegates_execute(self):
        executor = Mock()
        executor.process = AsyncMock(return_value="done")
        classifier = KeywordTaskClassifier(executor=executor)

        assert await classifier.execute("task", 2) == "done"
        executor.process.assert_awaited_once_with("task", 2)

    def test_abstract_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            TaskClassifier(name="bare")
