# Rendered with langchain_core PromptTemplate (f-string format).

KNOWLEDGE_PROMPT = """Based *only* on the context below, answer the user's question.

--- CONTEXT ---
{context}
--- END CONTEXT ---

User Question: "{question}\""""

WEB_SEARCH_PROMPT = (
    "You are a web search agent. Find relevant information for the query and provide a concise answer "
    'with 2-3 simulated markdown links. Query: "{query}"'
)

CODE_GENERATION_PROMPT = (
    "You are a code generation agent. Generate a code snippet for the request. "
    'Provide only the code in a single markdown code block. Request: "{request}"'
)

SUMMARIZATION_PROMPT = """Provide a concise, professional summary of the following text:

--- TEXT ---
{text}
--- END TEXT ---"""

CONTEXT_SEPARATOR = "\n\n---\n\n"
CONTEXT_BLOCK = "Source: {source_id}\nContent:\n{text}"

NO_RELEVANT_INFORMATION = "I couldn't find any relevant information in the uploaded documents to answer that."
NO_IMAGE_ATTACHED = "Error: No image was attached."
NOTHING_TO_SUMMARIZE = 'Error: Could not find document or text to summarize for "{prompt}".'
UNKNOWN_CAPABILITY = 'Error: Unknown capability "{capability}".'
