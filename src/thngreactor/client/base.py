from thngreactor.helper import ClassRegistry


class EntityClient(object):
    ''' Remote entity API, as seen by the rule dispatcher.

        Implementations raise `RemoteOperationError` when the remote call
        fails. Any other exception is wrapped by the dispatcher.
    '''

    async def create_action(self, thng_id: str, action_type: str, body: dict):
        raise NotImplementedError('EntityClient.create_action')

    async def update_property(self, thng_id: str, body: dict):
        raise NotImplementedError('EntityClient.update_property')


EntityClientRegistry = ClassRegistry(EntityClient)
