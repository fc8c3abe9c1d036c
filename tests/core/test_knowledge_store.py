"""
Test suite for the vector knowledge store.

Covers ingestion (chunk ids, skipped chunks, upsert batching, upsert
failures), search mapping and construction checks.

System role: Verification of knowledge ingestion and retrieval
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import KeywordEmbeddings
from finmind.boundary.llm import EmbeddingGateway
from finmind.boundary.vdb import FaissVectorIndex
from finmind.core.chunker import Chunker
from finmind.core.exceptions import InvalidConfig, ProviderError, VectorStoreError
from finmind.core.knowledge_store import VectorKnowledgeStore
from finmind.core.results import CallResult


@pytest.fixture
def gateway(keyword_embeddings: KeywordEmbeddings) -> EmbeddingGateway:
    """Provide a 4-d embedding gateway."""
    return EmbeddingGateway(keyword_embeddings, dimension=4)


@pytest.fixture
def faiss_index() -> FaissVectorIndex:
    """Provide an empty 4-d FAISS index."""
    return FaissVectorIndex(dimension=4)


def recording_index(dimension: int = 4) -> MagicMock:
    """Build an index mock that accepts every batch."""
    index = MagicMock()
    index.dimension = dimension
    index.upsert = AsyncMock(side_effect=lambda namespace, items: CallResult.success(len(items)))
    return index


class TestStore:
    """Test document ingestion."""

    @pytest.mark.asyncio
    async def test_store_should_skip_chunks_whose_embedding_failed(
        self,
        gateway: EmbeddingGateway,
        faiss_index: FaissVectorIndex,
    ) -> None:
        """Test a failed chunk is reported and the rest are stored."""
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, faiss_index, namespace="test")

        report = await store.store("doc.txt", "AAAABBBBFAIL")

        assert report.chunk_count == 3
        assert report.stored_count == 2
        assert report.skipped_chunks == [2]
        assert faiss_index.count("test") == 2

    @pytest.mark.asyncio
    async def test_store_should_assign_source_part_ids(self, gateway: EmbeddingGateway) -> None:
        """Test vector ids follow {source}_part_{index} with chunk metadata."""
        index = recording_index()
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, index, namespace="test")

        await store.store("doc.txt", "AAAABBBB")

        namespace, items = index.upsert.await_args.args
        assert namespace == "test"
        assert [item.id for item in items] == ["doc.txt_part_0", "doc.txt_part_1"]
        assert [item.metadata.text for item in items] == ["AAAA", "BBBB"]
        assert all(item.metadata.source == "doc.txt" for item in items)

    @pytest.mark.asyncio
    async def test_store_should_batch_upserts(self, gateway: EmbeddingGateway) -> None:
        """Test 200 chunks are upserted as 96 + 96 + 8."""
        index = recording_index()
        store = VectorKnowledgeStore(
            Chunker(chunk_size=4, overlap=0),
            gateway,
            index,
            namespace="test",
            batch_size=96,
        )

        report = await store.store("big.txt", "ABCD" * 200)

        assert [len(call.args[1]) for call in index.upsert.await_args_list] == [96, 96, 8]
        assert report.stored_count == 200

    @pytest.mark.asyncio
    async def test_store_should_raise_when_upsert_is_rejected(self, gateway: EmbeddingGateway) -> None:
        """Test a failed upsert batch aborts ingestion."""
        index = recording_index()
        index.upsert = AsyncMock(
            return_value=CallResult.failure(VectorStoreError("payload too large", operation="upsert"))
        )
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, index, namespace="test")

        with pytest.raises(VectorStoreError):
            await store.store("doc.txt", "AAAABBBB")

    @pytest.mark.asyncio
    async def test_store_should_report_zero_for_blank_text(self, gateway: EmbeddingGateway) -> None:
        """Test blank text produces an empty report without upserts."""
        index = recording_index()
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, index, namespace="test")

        report = await store.store("blank.txt", "   ")

        assert report.chunk_count == 0
        assert report.stored_count == 0
        index.upsert.assert_not_awaited()


class TestSearch:
    """Test similarity search."""

    @pytest.mark.asyncio
    async def test_search_should_return_best_match_first(
        self,
        gateway: EmbeddingGateway,
        faiss_index: FaissVectorIndex,
    ) -> None:
        """Test stored chunks come back as clamped candidates, best first."""
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, faiss_index, namespace="test")
        await store.store("doc.txt", "AAAABBBB")

        result = await store.search("A")

        assert result.ok
        assert [candidate.text for candidate in result.value] == ["AAAA", "BBBB"]
        assert result.value[0].vector_score == pytest.approx(1.0, abs=1e-5)
        assert all(0.0 <= candidate.vector_score <= 1.0 for candidate in result.value)
        assert result.value[0].source == "doc.txt"

    @pytest.mark.asyncio
    async def test_search_should_report_embedding_failure(
        self,
        gateway: EmbeddingGateway,
        faiss_index: FaissVectorIndex,
    ) -> None:
        """Test a failed query embedding is returned as a failed result."""
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, faiss_index, namespace="test")

        result = await store.search("FAIL")

        assert not result.ok
        assert isinstance(result.error, ProviderError)

    @pytest.mark.asyncio
    async def test_search_should_report_index_failure(self, gateway: EmbeddingGateway) -> None:
        """Test a failed index query is returned as a failed result."""
        index = recording_index()
        index.query = AsyncMock(return_value=CallResult.failure(VectorStoreError("down", operation="query")))
        store = VectorKnowledgeStore(Chunker(chunk_size=4, overlap=0), gateway, index, namespace="test", top_k=7)

        result = await store.search("A")

        assert isinstance(result.error, VectorStoreError)
        index.query.assert_awaited_once()
        assert index.query.await_args.args[2] == 7


class TestConfiguration:
    """Test construction checks."""

    @pytest.mark.parametrize("batch_size", [0, 101])
    def test_store_should_reject_batch_size_out_of_range(self, gateway: EmbeddingGateway, batch_size: int) -> None:
        """Test batch size must be within 1..100."""
        with pytest.raises(InvalidConfig):
            VectorKnowledgeStore(Chunker(), gateway, recording_index(), namespace="test", batch_size=batch_size)

    def test_store_should_reject_dimension_disagreement(self, gateway: EmbeddingGateway) -> None:
        """Test gateway and index must share one dimension."""
        with pytest.raises(InvalidConfig):
            VectorKnowledgeStore(Chunker(), gateway, recording_index(dimension=8), namespace="test")
