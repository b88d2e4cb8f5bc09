import azure.functions as func
from direito.api.cors import cors_preflight, cors_headers

bp = func.Blueprint()


@bp.function_name(name="prazos_calcular")
@bp.route(route="prazos/calcular", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.FUNCTION)
def prazos_calcular(req: func.HttpRequest) -> func.HttpResponse:
    """Calcula vencimento de prazo (dias uteis ou corridos) com passo a passo."""
    if req.method == "OPTIONS":
        return cors_preflight(req)
    from direito.api.prazos import handle_calcular_prazo
    resp = handle_calcular_prazo(req)
    resp.headers.update(cors_headers(req))
    return resp
