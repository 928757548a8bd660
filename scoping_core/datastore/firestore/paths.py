from google.cloud.firestore_v1 import Client as FirestoreClient, CollectionReference, DocumentReference


def get_collection(client: FirestoreClient, collection_name: str) -> CollectionReference:
    return client.collection(collection_name)


def get_document_path(client: FirestoreClient, collection_name: str, document_id: str) -> DocumentReference:
    return client.collection(collection_name).document(document_id)


def get_user_messages(
    client: FirestoreClient, users_collection: str, user_id: str, messages_collection: str
) -> CollectionReference:
    return client.collection(users_collection).document(user_id).collection(messages_collection)


def get_user_message_path(
    client: FirestoreClient, users_collection: str, user_id: str, messages_collection: str, message_id: str
) -> DocumentReference:
    return (
        client.collection(users_collection)
        .document(user_id)
        .collection(messages_collection)
        .document(message_id)
    )
