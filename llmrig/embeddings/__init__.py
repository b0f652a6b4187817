"""Embeddings, embedding models, embeddable types and tool schemas."""