import azure.functions as func
from direito.api.cors import cors_preflight, cors_headers

bp = func.Blueprint()


@bp.function_name(name="legal_artigos")
@bp.route(route="legal/artigos", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_artigos(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_extrair_artigos
    resp = handle_extrair_artigos(req)
    resp.headers.update(cors_headers(req))
    return resp


@bp.function_name(name="legal_validar")
@bp.route(route="legal/validar", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_validar(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_validar_lei
    resp = handle_validar_lei(req)
    resp.headers.update(cors_headers(req))
    return resp


@bp.function_name(name="legal_alteracoes")
@bp.route(route="legal/alteracoes", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_alteracoes(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_extrair_alteracoes
    resp = handle_extrair_alteracoes(req)
    resp.headers.update(cors_headers(req))
    return resp


@bp.function_name(name="legal_raspar")
@bp.route(route="legal/raspar", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_raspar(req: func.HttpRequest) -> func.HttpResponse:
    """
    Raspa lei do Planalto (texto tachado removido).

    Body JSON:
        lei: str                  'Lei nº 8.078', 'Lei Complementar nº 123'
        url: str                  alternativa a 'lei' (planalto.gov.br)
        extrair_alteracoes: bool  (opcional) inclui anotacoes de alteracao
    """
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_raspar_lei
    resp = handle_raspar_lei(req)
    resp.headers.update(cors_headers(req))
    return resp


@bp.function_name(name="legal_formatar")
@bp.route(route="legal/formatar", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_formatar(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_formatar_lei
    resp = handle_formatar_lei(req)
    resp.headers.update(cors_headers(req))
    return resp


@bp.function_name(name="legal_popular")
@bp.route(route="legal/popular", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def legal_popular(req: func.HttpRequest) -> func.HttpResponse:
    """Grava artigos na tabela da lei (UPSERT por numero do artigo)."""
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.legal import handle_popular_tabela
    resp = handle_popular_tabela(req)
    resp.headers.update(cors_headers(req))
    return resp
