import argparse
import logging
import os
from agentchat.database import engine, create_db_and_tables
from agentchat.rag.retrieval import WorkspaceIndex

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1  # Number of paragraphs per chunk


def chunk_text(text, chunk_size=CHUNK_SIZE):
    paragraphs = [p.strip() for p in text.split('\n\n') if p.strip()]
    chunks = []
    for i in range(0, len(paragraphs), chunk_size):
        chunks.append('\n\n'.join(paragraphs[i:i + chunk_size]))
    return chunks


def ingest_directory(index, workspace_id, source_dir, chunk_size=CHUNK_SIZE):
    """Chunk every .txt file in ``source_dir`` and add it to the workspace's index."""
    total = 0
    for fname in sorted(os.listdir(source_dir)):
        if not fname.endswith('.txt'):
            continue
        with open(os.path.join(source_dir, fname), 'r', encoding='utf-8') as f:
            chunks = chunk_text(f.read(), chunk_size)
        added = index.add_texts(workspace_id, fname, chunks)
        logger.info(f"Embedded {fname}: {added} chunks")
        total += added
    return total


def main(argv=None):
    parser = argparse.ArgumentParser(description="Embed .txt files into a workspace's vector store.")
    parser.add_argument("workspace_id")
    parser.add_argument("source_dir")
    parser.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help="paragraphs per chunk")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    create_db_and_tables()
    index = WorkspaceIndex(engine)
    total = ingest_directory(index, args.workspace_id, args.source_dir, args.chunk_size)
    logger.info(f"Workspace {args.workspace_id}: {total} chunks stored")


if __name__ == "__main__":
    main()
