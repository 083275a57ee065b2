from thngreactor.error import ReactorException


class RemoteOperationError(ReactorException):
    """Entity API call failed"""
    errcode = "R00.004"
