class ProspectPipelineError(Exception):
    """Base class for failures whose message is safe to show to the sales team."""


class InvalidModelOutput(ProspectPipelineError):
    pass


class LLMUnavailable(ProspectPipelineError):
    pass


class LLMCallFailed(ProspectPipelineError):
    pass


class GoogleAuthMissing(ProspectPipelineError):
    pass


class SheetPublishError(ProspectPipelineError):
    pass


class NoCompaniesFound(ProspectPipelineError):
    pass
